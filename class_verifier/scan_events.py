"""Structured events emitted while a scan runs."""

from dataclasses import dataclass
from pathlib import Path

from class_verifier.errors import ScanError


@dataclass(frozen=True)
class ScanStarted:
    """The scan is about to process these roots, in this order."""

    roots: tuple[Path, ...]


@dataclass(frozen=True)
class ArtifactBroken:
    """One logical name failed to load because its structure is invalid."""

    name: str


@dataclass(frozen=True)
class ScanAborted:
    """A fatal error stopped the scan; no failure names follow."""

    error: ScanError

    @property
    def category(self) -> str:
        """Return the category of the error that stopped the scan."""
        return self.error.category


ScanEvent = ScanStarted | ArtifactBroken | ScanAborted
