"""Ed25519 signatures with Base58 text encoding.

Identities (public keys) and signatures travel as Base58 text using the
Bitcoin alphabet: 32 bytes for a public key, 64 bytes for a signature.
"""

from __future__ import annotations

import logging

import base58
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from hdcacl.exceptions import AclCryptoError

_logger = logging.getLogger(__name__)

PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64


def decode_base58(text: str, *, name: str, expected_nbytes: int) -> bytes:
    """Decode Base58 *text* and check its decoded length."""
    if not text:
        raise AclCryptoError(f"{name} is empty")
    try:
        data = base58.b58decode(text)
    except ValueError as exc:
        raise AclCryptoError(f"{name} must be base58-encoded") from exc
    if len(data) != expected_nbytes:
        raise AclCryptoError(f"{name} must be {expected_nbytes} bytes (got {len(data)})")
    return data


def encode_base58(data: bytes) -> str:
    """Encode raw bytes as Base58 text."""
    return base58.b58encode(data).decode("ascii")


class Ed25519Base58Scheme:
    """Signature scheme for Base58-encoded Ed25519 identities."""

    def parse_public_key(self, text: str) -> Ed25519PublicKey:
        """Parse a Base58 identity string into a public key.

        Raises
        ------
        AclCryptoError
            If the text is not a valid 32-byte Base58 public key.
        """
        raw = decode_base58(text, name="public key", expected_nbytes=PUBLIC_KEY_SIZE)
        try:
            return Ed25519PublicKey.from_public_bytes(raw)
        except ValueError as exc:
            raise AclCryptoError(f"invalid ed25519 public key: {exc}") from exc

    def parse_signature(self, text: str) -> bytes:
        """Parse a Base58 signature string into raw signature bytes."""
        return decode_base58(text, name="signature", expected_nbytes=SIGNATURE_SIZE)

    def verify(self, public_key: Ed25519PublicKey, message: bytes, signature: bytes) -> bool:
        """Return ``True`` when *signature* is valid for *message* under *public_key*."""
        try:
            public_key.verify(bytes(signature), message)
        except (InvalidSignature, ValueError):
            return False
        return True
