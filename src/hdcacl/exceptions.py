"""Custom exception hierarchy for hdcacl."""

from __future__ import annotations

from hdcacl._constants import SIGNATURE_REQUIRED_MESSAGE


class AclError(Exception):
    """Base exception for all hdcacl errors."""


class AclConfigError(AclError):
    """Invalid or missing configuration."""


class AclCryptoError(AclError):
    """A public key or signature could not be decoded."""


class AclInvalidSignatureError(AclCryptoError):
    """Signature does not verify under any accepted message form."""


class AclFormatError(AclError):
    """Persisted ACL data is not valid ACL JSON."""


class AclSerializationError(AclError):
    """An ACL could not be encoded to its canonical JSON form."""


class AclSignatureRequiredError(AclError):
    """Attempt to clear a versioned ACL without a signature."""

    def __init__(self, message: str = SIGNATURE_REQUIRED_MESSAGE) -> None:
        super().__init__(message)


class AclStorageError(AclError):
    """Storage-level failure for the ACL blob."""

    def __init__(self, message: str, *, root: str = "") -> None:
        self.root = root
        super().__init__(message)


class AclNotFoundError(AclStorageError):
    """No ACL has been provisioned under the storage root."""


class AclCorruptedError(AclStorageError):
    """A zero-length ACL blob was found and removed.

    The current call has failed and the ACL must be re-provisioned.
    An empty ACL is never returned in its place, since it could be
    mistaken for an unlocked device.
    """


class AclWriteError(AclStorageError):
    """Writing the ACL blob failed."""


class AclDeleteError(AclStorageError):
    """Removing the ACL blob failed."""
