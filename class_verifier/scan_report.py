"""Logic for writing a JSON summary of a finished scan."""

import json
from pathlib import Path
from typing import Any

from class_verifier.scan_result import ScanResult


class ScanReport:
    """Serializes a ScanResult together with the configuration it ran under."""

    def __init__(self, config_hash: str) -> None:
        """Initialize the report with the hash of the active configuration."""
        self.config_hash = config_hash

    def build(self, result: ScanResult) -> dict[str, Any]:
        """Return the report as a plain dictionary."""
        return {
            "meta": {
                "config_hash": self.config_hash,
                "roots": [str(r) for r in result.roots],
                "total_candidates": result.candidates,
            },
            "failures": list(result.failures),
            "stats": {
                "outcome_counts": {
                    status.value: count
                    for status, count in result.outcome_counts.items()
                },
            },
        }

    def generate_report(self, path: str, result: ScanResult) -> None:
        """Write the summary report to a JSON file."""
        report = self.build(result)
        Path(path).write_text(
            json.dumps(report, indent=2, sort_keys=True) + "\n", encoding="utf-8"
        )
