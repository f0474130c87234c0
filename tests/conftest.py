from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from hdcacl._crypto import encode_base58


class Signer:
    """Throwaway Ed25519 identity for signing ACL messages in tests."""

    def __init__(self) -> None:
        self._key = Ed25519PrivateKey.generate()
        raw = self._key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
        self.identity = encode_base58(raw)

    def sign(self, message: bytes) -> bytes:
        return self._key.sign(message)

    def sign_b58(self, message: bytes) -> str:
        return encode_base58(self.sign(message))


@pytest.fixture
def manager() -> Signer:
    return Signer()


@pytest.fixture
def other_manager() -> Signer:
    return Signer()


@pytest.fixture
def stranger() -> Signer:
    return Signer()
