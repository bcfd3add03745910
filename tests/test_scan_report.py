"""Tests for the JSON scan report."""

import json
from pathlib import Path

from class_verifier.load_outcome import OutcomeStatus
from class_verifier.scan_report import ScanReport
from class_verifier.scan_result import ScanResult


def _result() -> ScanResult:
    return ScanResult(
        roots=(Path("r1"), Path("r2")),
        failures=("a.Bar", "shared.Util"),
        outcome_counts={
            OutcomeStatus.LOADED: 5,
            OutcomeStatus.CORRUPT: 3,
            OutcomeStatus.UNRESOLVED_REFERENCE: 1,
        },
        candidates=9,
    )


def test_scan_report_generation(tmp_path: Path) -> None:
    """Verify that the scan report is generated correctly."""
    output_file = tmp_path / "report.json"
    ScanReport("hash123").generate_report(str(output_file), _result())

    content = json.loads(output_file.read_text(encoding="utf-8"))
    assert content["meta"] == {
        "config_hash": "hash123",
        "roots": [str(Path("r1")), str(Path("r2"))],
        "total_candidates": 9,
    }
    assert content["failures"] == ["a.Bar", "shared.Util"]
    assert content["stats"]["outcome_counts"] == {
        "loaded": 5,
        "corrupt": 3,
        "unresolved_reference": 1,
    }


def test_scan_report_is_byte_identical(tmp_path: Path) -> None:
    """Verify that the same result always produces the same bytes."""
    first = tmp_path / "first.json"
    second = tmp_path / "second.json"
    ScanReport("h").generate_report(str(first), _result())
    ScanReport("h").generate_report(str(second), _result())
    assert first.read_bytes() == second.read_bytes()
