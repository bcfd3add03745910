"""Sinks that receive scan events."""

import logging
from abc import ABC, abstractmethod

from class_verifier.scan_events import (
    ArtifactBroken,
    ScanAborted,
    ScanEvent,
    ScanStarted,
)

logger = logging.getLogger(__name__)


class ReportingSink(ABC):
    """Receives scan events; failures inside a sink are not the scan's concern."""

    @abstractmethod
    def emit(self, event: ScanEvent) -> None:
        """Handle one event."""


class LoggingSink(ReportingSink):
    """Writes events to the ``class_verifier`` log."""

    def emit(self, event: ScanEvent) -> None:
        """Log the event at a level matching its kind."""
        if isinstance(event, ScanStarted):
            logger.info("Scanning %s", [str(r) for r in event.roots])
        elif isinstance(event, ArtifactBroken):
            logger.info("Broken %s", event.name)
        elif isinstance(event, ScanAborted):
            logger.error("%s error: %s", event.category, event.error)


class CollectingSink(ReportingSink):
    """Keeps every event in memory, in emission order."""

    def __init__(self) -> None:
        """Initialize an empty event list."""
        self.events: list[ScanEvent] = []

    def emit(self, event: ScanEvent) -> None:
        """Append the event."""
        self.events.append(event)

    @property
    def broken_names(self) -> list[str]:
        """Return the names of all ArtifactBroken events."""
        return [e.name for e in self.events if isinstance(e, ArtifactBroken)]
