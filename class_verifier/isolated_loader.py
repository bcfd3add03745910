"""Logic for loading every candidate of one root through a single context."""

import logging
from collections.abc import Iterable
from pathlib import Path

from class_verifier.candidate import Candidate
from class_verifier.errors import LoadInfrastructureError
from class_verifier.load_outcome import LoadOutcome, OutcomeStatus
from class_verifier.loading_context import LoadingContextProvider

logger = logging.getLogger(__name__)


class IsolatedLoader:
    """Resolves the artifacts of a root in a context that sees only that root."""

    def __init__(self, provider: LoadingContextProvider) -> None:
        """Initialize the loader with the provider that builds contexts."""
        self.provider = provider

    def load_root(self, root: Path, paths: Iterable[Path]) -> list[LoadOutcome]:
        """Resolve each artifact path under root exactly once, in name order."""
        base = root.absolute()
        candidates = sorted(
            (Candidate.from_path(base, p, self.provider.extension) for p in paths),
            key=lambda c: c.name,
        )

        try:
            context = self.provider.open_context(base)
        except LoadInfrastructureError:
            raise
        except Exception as exc:
            msg = f"Cannot create loading context for {base}: {exc}"
            raise LoadInfrastructureError(msg) from exc

        outcomes: list[LoadOutcome] = []
        for candidate in candidates:
            logger.debug("Loading %s", candidate.name)
            try:
                outcome = context.resolve(candidate.name)
            except LoadInfrastructureError:
                raise
            except Exception as exc:
                msg = f"Unexpected failure loading {candidate.name} from {base}: {exc}"
                raise LoadInfrastructureError(msg) from exc

            if not isinstance(outcome, LoadOutcome):
                msg = f"Loading context returned {outcome!r} for {candidate.name}"
                raise LoadInfrastructureError(msg)

            if outcome.status is OutcomeStatus.CORRUPT:
                logger.debug("Can't load %s. %s", candidate.name, outcome.detail)
            elif outcome.status is OutcomeStatus.UNRESOLVED_REFERENCE:
                logger.debug(
                    "Ignoring %s, unresolved reference: %s",
                    candidate.name,
                    outcome.detail,
                )
            outcomes.append(outcome)
        return outcomes
