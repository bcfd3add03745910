"""Utility for turning a search path into a list of roots."""

import os
from pathlib import Path


def find_class_path_dirs(class_path: str) -> list[Path]:
    """Return the directory entries of a search path, in order.

    Entries that are archives, missing, or empty are dropped.
    """
    dirs: list[Path] = []
    for entry in class_path.split(os.pathsep):
        if entry and Path(entry).is_dir():
            dirs.append(Path(entry))
    return dirs
