"""Logic for merging a user configuration over the defaults."""

from typing import Any

# Lists that extend the defaults instead of replacing them
ADDITIVE_KEYS = frozenset({"platform_prefixes"})


def deep_merge(
    base: dict[str, Any], update: dict[str, Any], prefix: str = ""
) -> dict[str, Any]:
    """Merge update over base without modifying either.

    - Sections (mappings in base) merge recursively and may only be replaced by
      another mapping.
    - 'platform_prefixes' keeps the base entries first, then appends new ones
      in the order given, skipping duplicates.
    - Anything else in update replaces the base value.

    Raises ValueError naming the dotted key when a section or an additive list
    is given a value of the wrong shape.
    """
    result = base.copy()
    for key, value in update.items():
        dotted = f"{prefix}{key}"
        current = result.get(key)
        if isinstance(current, dict):
            if not isinstance(value, dict):
                msg = f"Configuration key '{dotted}' must be a mapping"
                raise ValueError(msg)
            result[key] = deep_merge(current, value, f"{dotted}.")
        elif key in ADDITIVE_KEYS:
            if not isinstance(value, list):
                msg = f"Configuration key '{dotted}' must be a list"
                raise ValueError(msg)
            result[key] = list(dict.fromkeys([*(current or []), *value]))
        else:
            result[key] = value
    return result
