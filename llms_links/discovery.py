"""Discover ``llms.txt`` documentation files under a directory tree."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from llms_links.models import DocumentPath, FilesystemError

DEFAULT_SUFFIX = "llms.txt"


def _walk(directory: Path, suffix: str) -> List[DocumentPath]:
    found: List[DocumentPath] = []
    try:
        entries = sorted(os.scandir(directory), key=lambda e: e.name)
    except OSError as exc:
        print(f"[DISCOVER] Skipping unreadable directory {directory}: {exc}")
        return found

    for entry in entries:
        path = Path(entry.path)
        if entry.name.endswith(suffix) and entry.is_file():
            found.append(path)
        # Symlinked directories are not followed, which rules out cycles.
        elif entry.is_dir(follow_symlinks=False):
            found.extend(_walk(path, suffix))
    return found


def discover(root_dir: str | os.PathLike[str], suffix: str = DEFAULT_SUFFIX) -> List[DocumentPath]:
    """Return every regular file below *root_dir* whose name ends with *suffix*.

    Subdirectories are visited recursively.  A subdirectory that cannot be
    listed is skipped with a warning; only problems with *root_dir* itself are
    fatal.

    Raises:
        FilesystemError: If *root_dir* does not exist, is not a directory, or
            cannot be listed.
    """
    root = Path(root_dir)
    if not root.exists():
        raise FilesystemError(f"Directory not found: {root}")
    if not root.is_dir():
        raise FilesystemError(f"Not a directory: {root}")
    try:
        os.scandir(root).close()
    except OSError as exc:
        raise FilesystemError(f"Cannot read directory {root}: {exc}") from exc

    return _walk(root, suffix)
