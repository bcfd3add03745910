"""Logic for finding artifact files under a root directory."""

import logging
import os
from pathlib import Path

from class_verifier.errors import FilesystemError

logger = logging.getLogger(__name__)


def discover_artifacts(
    root: Path, extension: str = ".class", *, follow_symlinks: bool = True
) -> set[Path]:
    """Return every file under root whose name ends with the artifact extension.

    Symlinked directories are entered only when ``follow_symlinks`` is set, and a
    directory whose real path was already walked is never walked twice.
    """
    if not root.exists():
        msg = f"Root does not exist: {root}"
        raise FilesystemError(msg)
    if not root.is_dir():
        msg = f"Root is not a directory: {root}"
        raise FilesystemError(msg)

    def on_error(exc: OSError) -> None:
        msg = f"Cannot read directory {exc.filename}: {exc.strerror}"
        raise FilesystemError(msg) from exc

    base = root.absolute()
    found: set[Path] = set()
    visited: set[str] = set()

    for dirpath, dirnames, filenames in os.walk(
        base, onerror=on_error, followlinks=follow_symlinks
    ):
        real = os.path.realpath(dirpath)
        if real in visited:
            logger.warning("Skipping already visited directory %s", dirpath)
            dirnames[:] = []
            continue
        visited.add(real)

        # Sorted so that the first of two links to one directory always wins
        dirnames.sort()

        for filename in filenames:
            if filename.endswith(extension) and len(filename) > len(extension):
                found.add(Path(dirpath) / filename)

    logger.debug("Found %d artifacts under %s", len(found), base)
    return found
