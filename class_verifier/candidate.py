"""Data model for a discovered artifact."""

from dataclasses import dataclass
from pathlib import Path

from class_verifier.logical_name_for import logical_name_for


@dataclass(frozen=True)
class Candidate:
    """An artifact file found under a root, together with its logical name."""

    root: Path
    path: Path
    name: str

    @classmethod
    def from_path(cls, root: Path, path: Path, extension: str) -> "Candidate":
        """Build a candidate for a path discovered under root."""
        return cls(root=root, path=path, name=logical_name_for(root, path, extension))
