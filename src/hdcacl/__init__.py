"""hdcacl - Signature-authorized access control list for a device."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("hdcacl")
except PackageNotFoundError:
    __version__ = "0+local"
from hdcacl._constants import ACL_FILE_NAME
from hdcacl._crypto import Ed25519Base58Scheme, SignatureScheme
from hdcacl.authorization import (
    clear_message,
    legacy_store_message,
    store_message,
    validate_clear_signature,
    validate_signature,
    validate_store_signature,
)
from hdcacl.config import AclConfig
from hdcacl.exceptions import (
    AclConfigError,
    AclCorruptedError,
    AclCryptoError,
    AclDeleteError,
    AclError,
    AclFormatError,
    AclInvalidSignatureError,
    AclNotFoundError,
    AclSerializationError,
    AclSignatureRequiredError,
    AclStorageError,
    AclWriteError,
)
from hdcacl.models import Acl
from hdcacl.storage import BlobStore, FileBlobStore
from hdcacl.store import AclStore, acl_exists, clear_acl, load_acl, store_acl

__all__ = [
    "__version__",
    "ACL_FILE_NAME",
    "Acl",
    "AclConfig",
    "AclConfigError",
    "AclCorruptedError",
    "AclCryptoError",
    "AclDeleteError",
    "AclError",
    "AclFormatError",
    "AclInvalidSignatureError",
    "AclNotFoundError",
    "AclSerializationError",
    "AclSignatureRequiredError",
    "AclStorageError",
    "AclStore",
    "AclWriteError",
    "BlobStore",
    "Ed25519Base58Scheme",
    "FileBlobStore",
    "SignatureScheme",
    "acl_exists",
    "clear_acl",
    "clear_message",
    "legacy_store_message",
    "load_acl",
    "store_acl",
    "store_message",
    "validate_clear_signature",
    "validate_signature",
    "validate_store_signature",
]
