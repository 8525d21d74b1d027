"""File storage service for MiniDrive.

Handles persisting uploads and locating downloads on disk.
Files are stored in: {root_dir}/{client relative path}
In-flight uploads are staged in: {root_dir}/.minidrive-tmp/
"""
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Tuple, Union

from .paths import STAGING_DIR_NAME, UnsafePathError, resolve_under_root
from .schemas import StoredFile, get_file_kind, guess_media_type
from .walker import list_files

logger = logging.getLogger(__name__)

Upload = Tuple[str, BinaryIO]


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


# Read once at import; os.umask cannot be queried without setting it.
_UMASK = _current_umask()


class FileStorageService:
    """Service for managing the storage root."""

    def __init__(self, root_dir: Union[str, Path], max_depth: Optional[int] = None):
        """Initialize the service and create the storage root if needed."""
        self._root_dir = Path(root_dir)
        self._max_depth = max_depth
        self._staging_dir = self._root_dir / STAGING_DIR_NAME
        self._ensure_root_dir()

    @property
    def root_dir(self) -> Path:
        return self._root_dir

    def _ensure_root_dir(self) -> None:
        """Ensure the storage root and its staging directory exist."""
        self._root_dir.mkdir(parents=True, exist_ok=True)
        self._staging_dir.mkdir(exist_ok=True)

    def list_files(self) -> List[str]:
        """List every stored file as a path relative to the root."""
        return list_files(self._root_dir, max_depth=self._max_depth)

    def resolve_download(self, raw_path: str) -> Optional[Path]:
        """Get the on-disk path for a requested file.

        Returns None when the path is unsafe, missing, or not a regular file.
        """
        try:
            file_path = resolve_under_root(self._root_dir, raw_path)
        except UnsafePathError:
            return None
        if not file_path.is_file():
            return None
        return file_path

    def save_uploads(self, uploads: Sequence[Upload]) -> List[StoredFile]:
        """Persist a batch of uploaded files.

        Every declared filename is validated before anything is written, so
        a request containing one unsafe path stores nothing. Files are then
        written in order; an I/O error stops the batch but files already
        written stay in place. Existing files are overwritten.

        Args:
            uploads: ``(declared filename, readable binary file)`` pairs.

        Returns:
            StoredFile entries for every file written.

        Raises:
            UnsafePathError: If any declared filename escapes the root.
            OSError: If writing a file fails.
        """
        root = self._root_dir.resolve()
        targets = [
            (resolve_under_root(root, filename), fileobj)
            for filename, fileobj in uploads
        ]

        stored: List[StoredFile] = []
        for destination, fileobj in targets:
            size_bytes = self._write_atomic(destination, fileobj)
            relative_path = destination.relative_to(root).as_posix()
            stored.append(
                StoredFile(
                    relative_path=relative_path,
                    size_bytes=size_bytes,
                    kind=get_file_kind(relative_path),
                    media_type=guess_media_type(relative_path),
                )
            )
            logger.info(f"Saved file: {destination} ({size_bytes} bytes)")
        return stored

    def _write_atomic(self, destination: Path, fileobj: BinaryIO) -> int:
        """Copy *fileobj* into the staging directory, then rename it into place.

        Staged files are invisible to listings and downloads. The staging
        directory shares the root's filesystem, so the rename is atomic and
        readers and concurrent writers only ever see a complete file.
        """
        destination.parent.mkdir(parents=True, exist_ok=True)
        self._staging_dir.mkdir(exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._staging_dir, prefix="upload-", suffix=".part"
        )
        try:
            with os.fdopen(fd, "wb") as tmp:
                shutil.copyfileobj(fileobj, tmp)
                size_bytes = tmp.tell()
            os.chmod(tmp_name, 0o666 & ~_UMASK)
            os.replace(tmp_name, destination)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
        return size_bytes
