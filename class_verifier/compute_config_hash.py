"""Fingerprint of the settings that decide scan outcomes."""

import hashlib
import json
from typing import Any

# Sections that change which artifacts are found or how they are classified.
# Logging and report settings are left out so they do not change the hash.
OUTCOME_SECTIONS = ("scan", "loader")


def compute_config_hash(config: dict[str, Any]) -> str:
    """Return a sha256 over the outcome-affecting sections of config.

    Platform prefixes are compared as a set, so two configs listing the same
    prefixes in a different order hash the same.
    """
    relevant = {section: config.get(section, {}) for section in OUTCOME_SECTIONS}
    loader = dict(relevant["loader"])
    if "platform_prefixes" in loader:
        loader["platform_prefixes"] = sorted(set(loader["platform_prefixes"]))
    relevant["loader"] = loader
    canonical = json.dumps(relevant, sort_keys=True, ensure_ascii=True)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
