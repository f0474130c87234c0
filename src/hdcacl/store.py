"""Persistence of the device ACL.

:class:`AclStore` maps the :class:`~hdcacl.models.acl.Acl` record to a
single blob (``acl.data``) under a device storage root and enforces the
authorization rules before any change reaches storage.

The storage root is passed on every call; the store keeps no ACL state.
Mutations on the same root are serialized through a per-root lock since
``store`` and ``clear`` are read-check-write sequences.
"""

from __future__ import annotations

import functools
import logging
import os
import threading
import weakref
from collections.abc import Callable
from pathlib import Path

from hdcacl._constants import ACL_FILE_NAME, CORRUPTED_ACL_MESSAGE, DEFAULT_FILE_MODE
from hdcacl._crypto import DEFAULT_SCHEME, SignatureScheme
from hdcacl._redact import short_id, short_ids
from hdcacl.authorization import validate_clear_signature, validate_store_signature
from hdcacl.config import AclConfig
from hdcacl.exceptions import (
    AclCorruptedError,
    AclCryptoError,
    AclInvalidSignatureError,
    AclSerializationError,
    AclSignatureRequiredError,
)
from hdcacl.models.acl import Acl
from hdcacl.storage import BlobStore, FileBlobStore

_logger = logging.getLogger(__name__)

StorageRoot = str | os.PathLike[str]
Signature = str | bytes


class _RootLock:
    """Re-entrant lock for one storage root, held weakly by the registry."""

    __slots__ = ("_lock", "__weakref__")

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def __enter__(self) -> _RootLock:
        self._lock.acquire()
        return self

    def __exit__(self, *_exc: object) -> None:
        self._lock.release()


# Entries disappear once no caller holds the lock for that root.
_root_locks: weakref.WeakValueDictionary[str, _RootLock] = weakref.WeakValueDictionary()
_root_locks_guard = threading.Lock()


def _root_lock(root: StorageRoot) -> _RootLock:
    """Return the process-wide lock guarding *root*."""
    key = os.path.abspath(os.fspath(root))
    with _root_locks_guard:
        lock = _root_locks.get(key)
        if lock is None:
            lock = _RootLock()
            _root_locks[key] = lock
        return lock


class AclStore:
    """Load, store and clear the ACL of a device.

    Parameters
    ----------
    file_name : str
        Blob key of the ACL under each storage root.
    file_mode : int
        Permission bits for newly written ACL files.
    scheme : SignatureScheme or None
        Signature provider. Defaults to Base58 Ed25519.
    blob_store_factory : callable or None
        Builds the :class:`~hdcacl.storage.BlobStore` for a storage root.
        Defaults to :class:`~hdcacl.storage.FileBlobStore`.
    """

    def __init__(
        self,
        *,
        file_name: str = ACL_FILE_NAME,
        file_mode: int = DEFAULT_FILE_MODE,
        scheme: SignatureScheme | None = None,
        blob_store_factory: Callable[[Path], BlobStore] | None = None,
    ) -> None:
        self._file_name = file_name
        self._scheme = scheme or DEFAULT_SCHEME
        self._blob_store_factory = blob_store_factory or functools.partial(FileBlobStore, file_mode=file_mode)

    @classmethod
    def from_config(cls, config: AclConfig, *, scheme: SignatureScheme | None = None) -> AclStore:
        """Build a store using the file name and mode of *config*."""
        return cls(file_name=config.file_name, file_mode=config.file_mode, scheme=scheme)

    def _blobs(self, root: StorageRoot) -> BlobStore:
        return self._blob_store_factory(Path(root))

    def _parse_signature(self, signature: Signature) -> bytes:
        if isinstance(signature, (bytes, bytearray)):
            return bytes(signature)
        try:
            return self._scheme.parse_signature(signature)
        except AclCryptoError as exc:
            raise AclInvalidSignatureError(f"unable to decode signature: {exc}") from exc

    def _load(self, blobs: BlobStore, root: StorageRoot) -> Acl:
        data = blobs.read(self._file_name)
        if not data:
            _logger.warning("Found zero-length ACL under %s, removing it", root)
            blobs.delete(self._file_name)
            raise AclCorruptedError(CORRUPTED_ACL_MESSAGE, root=os.fspath(root))
        return Acl.from_data(data)

    def load(self, root: StorageRoot) -> Acl:
        """Read the ACL stored under *root*.

        Raises
        ------
        AclNotFoundError
            If no ACL is provisioned.
        AclCorruptedError
            If a zero-length ACL was found. It has been removed and the
            ACL must be provisioned again.
        AclFormatError
            If the stored data is not a valid ACL.
        """
        with _root_lock(root):
            return self._load(self._blobs(root), root)

    def exists(self, root: StorageRoot) -> bool:
        """Whether an ACL blob exists under *root*. Never modifies storage."""
        return self._blobs(root).exists(self._file_name)

    def store(self, root: StorageRoot, acl: Acl, signature: Signature) -> None:
        """Replace the ACL under *root* with *acl*.

        *signature* must be a manager of *acl* signing its store message,
        current or legacy form. Nothing is written unless it verifies.

        Raises
        ------
        AclInvalidSignatureError
            If the signature cannot be decoded or does not verify.
        AclSerializationError
            If *acl* encodes to nothing.
        AclStorageError
            If the storage directory cannot be created.
        AclWriteError
            If the blob cannot be written.
        """
        raw_signature = self._parse_signature(signature)
        if not validate_store_signature(acl, raw_signature, self._scheme):
            _logger.info(
                "Rejected ACL store under %s: signature %s does not match managers %s",
                root,
                short_id(raw_signature),
                short_ids(acl.managers),
            )
            raise AclInvalidSignatureError("invalid signature")

        data = acl.to_json()
        if not data:
            raise AclSerializationError("empty acl")

        with _root_lock(root):
            self._blobs(root).write(self._file_name, data)
        _logger.info(
            "Stored ACL under %s with %d manager(s) and %d driver(s)",
            root,
            len(acl.managers),
            len(acl.drivers),
        )

    def clear(self, root: StorageRoot, signature: Signature = "") -> None:
        """Remove the ACL under *root*.

        Succeeds silently when no ACL exists. A versioned ACL needs a
        signature by one of its managers over the clear message; a legacy
        (unversioned) ACL may be cleared without one.

        Raises
        ------
        AclSignatureRequiredError
            If the stored ACL is versioned and no signature was given.
        AclInvalidSignatureError
            If the signature cannot be decoded or does not verify.
        AclDeleteError
            If the blob cannot be removed.
        """
        with _root_lock(root):
            blobs = self._blobs(root)
            if not blobs.exists(self._file_name):
                _logger.debug("No ACL under %s, nothing to clear", root)
                return

            acl = self._load(blobs, root)
            if acl.is_versioned and not signature:
                raise AclSignatureRequiredError()

            if signature:
                raw_signature = self._parse_signature(signature)
                if not validate_clear_signature(acl, raw_signature, self._scheme):
                    raise AclInvalidSignatureError("invalid signature")
            else:
                _logger.warning("Clearing unversioned ACL under %s without a signature", root)

            blobs.delete(self._file_name)
        _logger.info("Cleared ACL under %s", root)


_default_store = AclStore()


def load_acl(root: StorageRoot) -> Acl:
    """Read the ACL under *root* with the default store. See :meth:`AclStore.load`."""
    return _default_store.load(root)


def acl_exists(root: StorageRoot) -> bool:
    """Whether an ACL exists under *root*. See :meth:`AclStore.exists`."""
    return _default_store.exists(root)


def store_acl(root: StorageRoot, acl: Acl, signature: Signature) -> None:
    """Store *acl* under *root* with the default store. See :meth:`AclStore.store`."""
    _default_store.store(root, acl, signature)


def clear_acl(root: StorageRoot, signature: Signature = "") -> None:
    """Clear the ACL under *root* with the default store. See :meth:`AclStore.clear`."""
    _default_store.clear(root, signature)
