"""Cryptographic primitives for ACL authorization."""

from __future__ import annotations

from typing import Any, Protocol

from hdcacl._crypto.ed25519 import Ed25519Base58Scheme, decode_base58, encode_base58
from hdcacl._crypto.hashing import canonical_json, md5_hex


class SignatureScheme(Protocol):
    """Protocol for the public-key provider used to authorize ACL changes."""

    def parse_public_key(self, text: str) -> Any: ...

    def parse_signature(self, text: str) -> bytes: ...

    def verify(self, public_key: Any, message: bytes, signature: bytes) -> bool: ...


DEFAULT_SCHEME: SignatureScheme = Ed25519Base58Scheme()

__all__ = [
    "DEFAULT_SCHEME",
    "Ed25519Base58Scheme",
    "SignatureScheme",
    "canonical_json",
    "decode_base58",
    "encode_base58",
    "md5_hex",
]
