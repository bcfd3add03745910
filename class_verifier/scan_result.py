"""Data model for the final result of a scan."""

from dataclasses import dataclass, field
from pathlib import Path

from class_verifier.load_outcome import OutcomeStatus


@dataclass(frozen=True)
class ScanResult:
    """Sorted failure names plus per-status counts over every root scanned."""

    roots: tuple[Path, ...]
    failures: tuple[str, ...]
    outcome_counts: dict[OutcomeStatus, int] = field(default_factory=dict)
    candidates: int = 0

    @property
    def has_failures(self) -> bool:
        """Return True if any artifact was reported as broken."""
        return bool(self.failures)
