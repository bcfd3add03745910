"""Tests for the per-root isolated loader."""

from pathlib import Path

import pytest

from class_verifier.errors import LoadInfrastructureError
from class_verifier.isolated_loader import IsolatedLoader
from class_verifier.load_outcome import LoadOutcome, OutcomeStatus
from class_verifier.loading_context import LoadingContext, LoadingContextProvider


class ScriptedContext(LoadingContext):
    """Context that answers from a fixed table and records each request."""

    def __init__(self, table: dict[str, object]) -> None:
        self.table = table
        self.requests: list[str] = []

    def resolve(self, name: str) -> LoadOutcome:
        self.requests.append(name)
        answer = self.table.get(name, OutcomeStatus.LOADED)
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, OutcomeStatus):
            return LoadOutcome(name, answer)
        return answer  # type: ignore[return-value]


class ScriptedProvider(LoadingContextProvider):
    """Provider that hands out ScriptedContexts and remembers them."""

    def __init__(self, table: dict[str, object] | None = None) -> None:
        self.table = table or {}
        self.opened: list[tuple[Path, ScriptedContext]] = []

    def open_context(self, root: Path) -> ScriptedContext:
        context = ScriptedContext(self.table)
        self.opened.append((root, context))
        return context


def _paths(root: Path, *names: str) -> list[Path]:
    return [root.joinpath(*n.split(".")).with_suffix(".class") for n in names]


def test_one_context_per_root_and_one_attempt_per_candidate(tmp_path: Path) -> None:
    """Verify that a single context resolves every candidate exactly once."""
    provider = ScriptedProvider()
    loader = IsolatedLoader(provider)

    outcomes = loader.load_root(tmp_path, _paths(tmp_path, "b.Two", "a.One", "Zed"))

    assert len(provider.opened) == 1
    root, context = provider.opened[0]
    assert root == tmp_path
    assert context.requests == ["Zed", "a.One", "b.Two"]
    assert [o.status for o in outcomes] == [OutcomeStatus.LOADED] * 3


def test_outcomes_are_passed_through(tmp_path: Path) -> None:
    """Verify that corrupt and unresolved outcomes are returned as data."""
    provider = ScriptedProvider(
        {
            "a.Bar": OutcomeStatus.CORRUPT,
            "a.Ref": OutcomeStatus.UNRESOLVED_REFERENCE,
        }
    )
    outcomes = IsolatedLoader(provider).load_root(
        tmp_path, _paths(tmp_path, "a.Bar", "a.Foo", "a.Ref")
    )
    by_name = {o.name: o.status for o in outcomes}
    assert by_name == {
        "a.Bar": OutcomeStatus.CORRUPT,
        "a.Foo": OutcomeStatus.LOADED,
        "a.Ref": OutcomeStatus.UNRESOLVED_REFERENCE,
    }


def test_each_call_opens_a_new_context(tmp_path: Path) -> None:
    """Verify that contexts are never reused between roots."""
    provider = ScriptedProvider()
    loader = IsolatedLoader(provider)
    loader.load_root(tmp_path / "r1", [])
    loader.load_root(tmp_path / "r2", [])
    assert [r.name for r, _ in provider.opened] == ["r1", "r2"]
    assert provider.opened[0][1] is not provider.opened[1][1]


def test_infrastructure_error_propagates(tmp_path: Path) -> None:
    """Verify that the context's own fatal error is raised unchanged."""
    error = LoadInfrastructureError("disk gone")
    provider = ScriptedProvider({"Foo": error})
    with pytest.raises(LoadInfrastructureError) as excinfo:
        IsolatedLoader(provider).load_root(tmp_path, _paths(tmp_path, "Foo"))
    assert excinfo.value is error


def test_unexpected_exception_is_promoted(tmp_path: Path) -> None:
    """Verify that an unrecognized failure becomes a fatal infrastructure error."""
    provider = ScriptedProvider({"Foo": RuntimeError("boom")})
    with pytest.raises(LoadInfrastructureError, match="boom") as excinfo:
        IsolatedLoader(provider).load_root(tmp_path, _paths(tmp_path, "Foo"))
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_non_outcome_result_is_rejected(tmp_path: Path) -> None:
    """Verify that a context returning something else is a fatal error."""
    provider = ScriptedProvider({"Foo": "loaded"})
    with pytest.raises(LoadInfrastructureError, match="returned"):
        IsolatedLoader(provider).load_root(tmp_path, _paths(tmp_path, "Foo"))


def test_context_construction_failure_is_fatal(tmp_path: Path) -> None:
    """Verify that a provider failing to build a context aborts the root."""

    class BrokenProvider(LoadingContextProvider):
        def open_context(self, root: Path) -> LoadingContext:
            raise OSError("no handles left")

    with pytest.raises(LoadInfrastructureError, match="no handles left"):
        IsolatedLoader(BrokenProvider()).load_root(tmp_path, [])
