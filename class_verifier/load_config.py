"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from class_verifier.class_file_context import DEFAULT_PLATFORM_PREFIXES
from class_verifier.class_file_reader import DEFAULT_MAX_MAJOR_VERSION
from class_verifier.deep_merge import deep_merge

DEFAULT_CONFIG: dict[str, Any] = {
    "log_level": "INFO",
    "scan": {
        "artifact_extension": ".class",
        "follow_symlinks": True,
    },
    "loader": {
        "platform_prefixes": list(DEFAULT_PLATFORM_PREFIXES),
        "max_major_version": DEFAULT_MAX_MAJOR_VERSION,
    },
    "report": {
        "fail_on_broken": False,
    },
}


def validate_config(config: dict[str, Any]) -> None:
    """Reject values the scanner cannot work with."""
    extension = config["scan"]["artifact_extension"]
    if not isinstance(extension, str) or not extension:
        msg = "scan.artifact_extension must be a non-empty string"
        raise ValueError(msg)

    version = config["loader"]["max_major_version"]
    if isinstance(version, bool) or not isinstance(version, int):
        msg = "loader.max_major_version must be an integer"
        raise ValueError(msg)

    for prefix in config["loader"]["platform_prefixes"]:
        if not isinstance(prefix, str) or not prefix:
            msg = f"loader.platform_prefixes entries must be strings: {prefix!r}"
            raise ValueError(msg)


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            if not isinstance(user_config, dict):
                msg = f"Configuration must be a mapping: {path}"
                raise ValueError(msg)
            config = deep_merge(config, user_config)
    validate_config(config)
    return config
