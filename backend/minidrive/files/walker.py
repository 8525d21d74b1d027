"""Recursive listing of the files stored under the storage root.

The index page calls this on every request; there is no cache, so the cost
grows with the size of the tree.
"""
import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple, Union

from .paths import STAGING_DIR_NAME

logger = logging.getLogger(__name__)


def walk_files(root: Union[str, Path], max_depth: Optional[int] = None) -> Iterator[str]:
    """Yield every regular file below *root* as a POSIX relative path.

    Traversal is depth-first with entries visited in name order. Symlinks
    and special files are skipped, and a directory reached twice through
    the same (device, inode) pair is not entered again. The upload staging
    directory at the top of the root is never listed.

    Args:
        root: Directory to walk.
        max_depth: How many directory levels below root to descend into.
            ``0`` lists only the top level, ``None`` means no limit.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        return

    visited: Set[Tuple[int, int]] = set()

    def _walk(directory: str, prefix: str, depth: int) -> Iterator[str]:
        st = os.stat(directory)
        key = (st.st_dev, st.st_ino)
        if key in visited:
            logger.debug("Skipping already visited directory: %s", directory)
            return
        visited.add(key)

        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)

        for entry in entries:
            rel = f"{prefix}{entry.name}"
            if not prefix and entry.name == STAGING_DIR_NAME:
                continue
            if entry.is_symlink():
                logger.debug("Skipping symlink: %s", rel)
                continue
            if entry.is_dir(follow_symlinks=False):
                if max_depth is not None and depth >= max_depth:
                    continue
                yield from _walk(entry.path, f"{rel}/", depth + 1)
            elif entry.is_file(follow_symlinks=False):
                yield rel
            else:
                logger.debug("Skipping non-regular entry: %s", rel)

    yield from _walk(str(root_path), "", 0)


def list_files(root: Union[str, Path], max_depth: Optional[int] = None) -> List[str]:
    """Return ``walk_files`` as a list."""
    return list(walk_files(root, max_depth=max_depth))
