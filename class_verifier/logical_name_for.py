"""Utility for deriving the logical name of an artifact."""

from pathlib import Path


def logical_name_for(root: Path, path: Path, extension: str) -> str:
    """Map an artifact path under root to its dotted, extension-less name.

    ``root/a/b/Foo.class`` becomes ``a.b.Foo``.
    """
    if not extension:
        msg = "Artifact extension must not be empty"
        raise ValueError(msg)
    relative = path.relative_to(root)
    parts = list(relative.parts)
    if not parts or not parts[-1].endswith(extension):
        msg = f"Not an artifact ({extension}): {path}"
        raise ValueError(msg)
    parts[-1] = parts[-1][: -len(extension)]
    return ".".join(parts)
