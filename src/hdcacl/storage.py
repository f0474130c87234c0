"""Durable key/blob storage for the ACL."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from hdcacl._constants import DEFAULT_FILE_MODE
from hdcacl.exceptions import AclDeleteError, AclNotFoundError, AclStorageError, AclWriteError

_logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Protocol for the blob store backing one device's ACL."""

    def read(self, key: str) -> bytes: ...

    def write(self, key: str, data: bytes) -> None: ...

    def delete(self, key: str) -> None: ...

    def exists(self, key: str) -> bool: ...


class FileBlobStore:
    """Blobs stored as files in one directory.

    Writes go to a temporary file in the same directory which is synced
    and then renamed over the target, so a reader sees either the old or
    the new content. A crash before the rename leaves the old file alone.
    """

    def __init__(self, root: str | os.PathLike[str], *, file_mode: int = DEFAULT_FILE_MODE) -> None:
        self._root = Path(root)
        self._file_mode = file_mode

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, key: str) -> Path:
        return self._root / key

    def read(self, key: str) -> bytes:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise AclNotFoundError(f"opening {path}: {exc}", root=str(self._root)) from exc
        except OSError as exc:
            raise AclStorageError(f"reading {path}: {exc}", root=str(self._root)) from exc

    def exists(self, key: str) -> bool:
        return self._path(key).exists()

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise AclDeleteError(f"removing {path}: {exc}", root=str(self._root)) from exc
        _logger.debug("Removed %s", path)

    def write(self, key: str, data: bytes) -> None:
        """Durably replace blob *key* with *data*.

        Raises
        ------
        AclStorageError
            If the storage directory cannot be created.
        AclWriteError
            If writing, syncing or renaming the file fails. The previous
            blob, if any, is left untouched. A failure to sync the
            directory after the rename is only logged, since the new blob
            is already in place.
        """
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise AclStorageError(f"creating {self._root}: {exc}", root=str(self._root)) from exc

        path = self._path(key)
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self._root)
        except OSError as exc:
            raise AclWriteError(f"opening temporary file for {path}: {exc}", root=str(self._root)) from exc

        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(tmp_name, self._file_mode)
            os.replace(tmp_name, path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise AclWriteError(f"writing {path}: {exc}", root=str(self._root)) from exc

        # The new ACL is live once renamed; a failed directory sync only
        # weakens durability of the rename across power loss.
        try:
            _fsync_directory(self._root)
        except OSError as exc:
            _logger.warning("Wrote %s but could not sync %s: %s", path, self._root, exc)
        _logger.debug("Wrote %d bytes to %s", len(data), path)


def _fsync_directory(directory: Path) -> None:
    """Persist directory entries (renames) of *directory*. No-op where unsupported."""
    if not hasattr(os, "O_DIRECTORY"):
        return
    dir_fd = os.open(directory, os.O_RDONLY | os.O_DIRECTORY)
    try:
        os.fsync(dir_fd)
    finally:
        os.close(dir_fd)
