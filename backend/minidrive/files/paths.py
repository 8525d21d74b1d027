"""Client path sanitization.

Uploaded filenames and download URLs carry client-controlled relative
paths. Everything that touches the filesystem goes through
``resolve_under_root`` so no stored file can end up outside the storage
root.
"""
import logging
import posixpath
import re
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

# One leading "../", a bare "..", or a run of separators.
_LEADING_TRAVERSAL = re.compile(r"^(?:\.\./|\.\.$|/+)")

# Top-level directory holding in-flight uploads; never addressable by clients.
STAGING_DIR_NAME = ".minidrive-tmp"


class UnsafePathError(ValueError):
    """Raised when a client path cannot be mapped inside the storage root."""


def strip_traversal(raw: str) -> str:
    """Strip leading parent-directory segments and separators.

    Backslashes are treated as separators so ``..\\..\\x`` behaves like
    ``../../x``.
    """
    path = raw.replace("\\", "/")
    while True:
        stripped = _LEADING_TRAVERSAL.sub("", path, count=1)
        if stripped == path:
            return path
        path = stripped


def sanitize_relative_path(raw: str) -> str:
    """Turn a client-supplied path into a safe POSIX relative path.

    Pure string handling, no filesystem access. Leading traversal is
    stripped, the rest is normalised, and anything that would still climb
    out of the root (``a/../../b``), collapse onto the root itself
    (``../..``) or point into the upload staging directory is rejected.

    Raises:
        UnsafePathError: If no safe relative path can be produced.
    """
    if not raw:
        raise UnsafePathError("Empty path")
    if "\x00" in raw:
        raise UnsafePathError("Path contains a NUL byte")

    normalized = posixpath.normpath(strip_traversal(raw))

    if normalized in (".", ""):
        raise UnsafePathError(f"Path resolves to the storage root: {raw!r}")
    if normalized == ".." or normalized.startswith("../"):
        raise UnsafePathError(f"Path escapes the storage root: {raw!r}")
    if normalized.split("/", 1)[0] == STAGING_DIR_NAME:
        raise UnsafePathError(f"Path targets a reserved directory: {raw!r}")
    return normalized


def resolve_under_root(root: Union[str, Path], raw: str) -> Path:
    """Resolve *raw* to an absolute path strictly below *root*.

    Symlinks are followed, so a link inside the root that points elsewhere
    is rejected as well.

    Raises:
        UnsafePathError: If the resolved path is not a descendant of root,
            or lies in the staging directory.
    """
    relative = sanitize_relative_path(raw)
    root_path = Path(root).resolve()
    candidate = (root_path / relative).resolve()

    if candidate == root_path or not candidate.is_relative_to(root_path):
        logger.warning("Rejected path outside storage root: %r", raw)
        raise UnsafePathError(f"Path escapes the storage root: {raw!r}")
    if candidate.relative_to(root_path).parts[0] == STAGING_DIR_NAME:
        raise UnsafePathError(f"Path targets a reserved directory: {raw!r}")
    return candidate
