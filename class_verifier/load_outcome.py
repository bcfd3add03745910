"""Data models for the outcome of resolving one logical name."""

from dataclasses import dataclass
from enum import Enum


class OutcomeStatus(str, Enum):
    """Three-way classification of a resolution attempt."""

    LOADED = "loaded"
    CORRUPT = "corrupt"
    UNRESOLVED_REFERENCE = "unresolved_reference"


@dataclass(frozen=True)
class LoadOutcome:
    """Represents the result of resolving a logical name within one root."""

    name: str
    status: OutcomeStatus
    detail: str = ""

    @property
    def is_reportable(self) -> bool:
        """Return True if this outcome belongs in the failure set."""
        return self.status is OutcomeStatus.CORRUPT
