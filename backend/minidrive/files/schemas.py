"""Pydantic schemas for stored files.

This module defines the data models for MiniDrive storage:
- FileKind: Enum for categorizing files by how the index page previews them
- StoredFile: A file persisted under the storage root

Files are identified purely by their path relative to the storage root;
there is no separate metadata store.
"""
import mimetypes
import posixpath
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_MEDIA_TYPE = "application/octet-stream"


class FileKind(str, Enum):
    """Preview categories.

    Files are categorized by lower-cased extension:
    - IMAGE: png, jpg, jpeg, gif, webp
    - VIDEO: mp4, webm, ogg
    - PDF: pdf
    - OTHER: everything else, offered as a download link
    """
    IMAGE = "image"
    VIDEO = "video"
    PDF = "pdf"
    OTHER = "other"


EXTENSIONS_BY_KIND = {
    FileKind.IMAGE: (".png", ".jpg", ".jpeg", ".gif", ".webp"),
    FileKind.VIDEO: (".mp4", ".webm", ".ogg"),
    FileKind.PDF: (".pdf",),
}


class StoredFile(BaseModel):
    """A file persisted under the storage root."""
    relative_path: str = Field(..., description="POSIX path relative to the storage root")
    size_bytes: int = Field(..., description="File size in bytes")
    kind: FileKind = Field(..., description="Preview category")
    media_type: str = Field(..., description="Content type served on download")


def get_extension(relative_path: str) -> str:
    """Return the lower-cased extension of *relative_path*, dot included."""
    return posixpath.splitext(relative_path)[1].lower()


def get_file_kind(relative_path: str, extension: Optional[str] = None) -> FileKind:
    """Determine the preview category of a file.

    Examples:
        >>> get_file_kind("holiday/beach.JPG")
        <FileKind.IMAGE: 'image'>
        >>> get_file_kind("notes.txt")
        <FileKind.OTHER: 'other'>
    """
    ext = (extension if extension is not None else get_extension(relative_path)).lower()
    for kind, extensions in EXTENSIONS_BY_KIND.items():
        if ext in extensions:
            return kind
    return FileKind.OTHER


def guess_media_type(relative_path: str) -> str:
    """Content type derived from the extension, falling back to binary."""
    media_type, _ = mimetypes.guess_type(relative_path, strict=False)
    return media_type or DEFAULT_MEDIA_TYPE
