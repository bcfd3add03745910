"""Contracts for root-scoped loading contexts."""

from abc import ABC, abstractmethod
from pathlib import Path

from class_verifier.load_outcome import LoadOutcome


class LoadingContext(ABC):
    """Resolves logical names against the artifacts of a single root."""

    @abstractmethod
    def resolve(self, name: str) -> LoadOutcome:
        """Attempt to resolve a logical name and classify the result.

        Must raise LoadInfrastructureError for any failure that is neither
        corruption nor a missing reference.
        """


class LoadingContextProvider(ABC):
    """Creates a fresh loading context for each root."""

    extension = ".class"

    @abstractmethod
    def open_context(self, root: Path) -> LoadingContext:
        """Return a new context that only sees artifacts under root."""
