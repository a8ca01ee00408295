"""Recursive discovery of source files under a root directory."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def discover_source_files(
    root: str,
    extensions: Iterable[str],
    exclude_dirs: Iterable[str] = (),
) -> list[str]:
    """Collect all files under a directory whose suffix matches.

    Walks the tree recursively without following symlinked directories.
    Unreadable directories are skipped. The order is whatever the
    filesystem walk yields and is not guaranteed to be sorted.

    Args:
        root: Directory to scan.
        extensions: Accepted file suffixes, including the dot (".php").
        exclude_dirs: Directory names pruned from the walk.

    Returns:
        List of matching file paths. Empty if the root does not exist.
    """
    suffixes = set(extensions)
    excluded = set(exclude_dirs)

    if not Path(root).is_dir():
        logger.warning("Source directory not found: %s", root)
        return []

    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        if excluded:
            dirnames[:] = [d for d in dirnames if d not in excluded]
        for filename in filenames:
            if Path(filename).suffix in suffixes:
                files.append(os.path.join(dirpath, filename))

    logger.debug("Discovered %d source files under %s", len(files), root)
    return files
