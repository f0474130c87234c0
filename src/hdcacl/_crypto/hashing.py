"""Canonical JSON encoding and hashing for ACL messages.

Signed documents are produced by existing signers with an HTML-safe
compact JSON encoder. The output here matches it byte-for-byte so that
the same signatures verify.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from hdcacl.exceptions import AclSerializationError

# Characters the signer's encoder escapes inside string values.
_HTML_SAFE_ESCAPES: tuple[tuple[str, str], ...] = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def canonical_json(payload: dict[str, Any]) -> bytes:
    """Encode *payload* as compact, HTML-safe UTF-8 JSON.

    Key insertion order is preserved and is part of the canonical form.

    Parameters
    ----------
    payload : dict
        The object to encode.

    Returns
    -------
    bytes
        UTF-8 encoded JSON.

    Raises
    ------
    AclSerializationError
        If the payload cannot be encoded.
    """
    try:
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        for char, escaped in _HTML_SAFE_ESCAPES:
            text = text.replace(char, escaped)
        return text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise AclSerializationError(f"marshalling acl: {exc}") from exc


def md5_hex(data: bytes) -> str:
    """Compute MD5 of *data*, returning lowercase hex."""
    return hashlib.md5(data).hexdigest()
