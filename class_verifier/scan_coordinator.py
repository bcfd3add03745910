"""Orchestration of a multi-root verification scan."""

import logging
from collections import Counter
from collections.abc import Sequence
from pathlib import Path

from class_verifier.discover_artifacts import discover_artifacts
from class_verifier.errors import ScanError
from class_verifier.isolated_loader import IsolatedLoader
from class_verifier.load_outcome import OutcomeStatus
from class_verifier.loading_context import LoadingContextProvider
from class_verifier.reporting import ReportingSink
from class_verifier.scan_events import ArtifactBroken, ScanAborted, ScanStarted
from class_verifier.scan_result import ScanResult

logger = logging.getLogger(__name__)


class ScanCoordinator:
    """Drives roots through discovery and isolated loading and reports failures.

    Failure names from all roots are merged into one set and emitted once,
    sorted, after the last root. A fatal error aborts the scan before any name
    is emitted.
    """

    def __init__(
        self,
        provider: LoadingContextProvider,
        sink: ReportingSink,
        *,
        follow_symlinks: bool = True,
    ) -> None:
        """Initialize the coordinator with its collaborators."""
        self.provider = provider
        self.sink = sink
        self.follow_symlinks = follow_symlinks
        self.loader = IsolatedLoader(provider)

    def scan(self, roots: Sequence[Path]) -> ScanResult:
        """Scan roots in the given order and return the sorted failure names."""
        roots = tuple(roots)
        self.sink.emit(ScanStarted(roots))

        failures: set[str] = set()
        counts: Counter[OutcomeStatus] = Counter()
        total = 0

        try:
            for root in roots:
                logger.debug("Scanning dir %s", root.absolute())
                paths = discover_artifacts(
                    root,
                    self.provider.extension,
                    follow_symlinks=self.follow_symlinks,
                )
                for outcome in self.loader.load_root(root, paths):
                    total += 1
                    counts[outcome.status] += 1
                    if outcome.is_reportable:
                        failures.add(outcome.name)
        except ScanError as exc:
            self.sink.emit(ScanAborted(exc))
            raise

        ordered = tuple(sorted(failures))
        for name in ordered:
            self.sink.emit(ArtifactBroken(name))

        return ScanResult(
            roots=roots,
            failures=ordered,
            outcome_counts={status: counts[status] for status in OutcomeStatus},
            candidates=total,
        )
