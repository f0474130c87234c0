"""Internal constants shared across the library."""

ACL_FILE_NAME = "acl.data"
DEFAULT_FILE_MODE = 0o644

# ------------------------------------------------------------------
# Canonical messages. Existing signers produce these byte-for-byte.
# ------------------------------------------------------------------

CLEAR_MESSAGE_PREFIX = "Clearing Access Control List for fleet "
STORE_MESSAGE_TEMPLATE = "Access Control List with {managers} manager(s) and {drivers} driver(s). Hash: {digest}"

SIGNATURE_REQUIRED_MESSAGE = "ACL on device requires a signature to be cleared"
CORRUPTED_ACL_MESSAGE = "Found and removed corrupted ACL. Please try locking again."
