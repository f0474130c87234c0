"""Canonical messages and signature checks for ACL changes.

A store or clear is authorized when one of the relevant ACL's managers
has signed the canonical message for that operation:

* **clear**: ``"Clearing Access Control List for fleet <fleetName>"``.
* **store**: a summary line carrying the manager and driver counts and
  the MD5 of the canonical ``{fleetName, managers, drivers}`` JSON.
* **legacy store**: the canonical ``{managers, drivers}`` JSON itself.
  ACLs signed before fleet names and hashing were introduced keep
  verifying through this form. It is permanent, not transitional.

Store validation walks :data:`STORE_MESSAGE_BUILDERS` in order and stops
at the first message form that verifies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from hdcacl._constants import CLEAR_MESSAGE_PREFIX, STORE_MESSAGE_TEMPLATE
from hdcacl._crypto import DEFAULT_SCHEME, SignatureScheme
from hdcacl._crypto.hashing import canonical_json, md5_hex
from hdcacl._redact import short_id
from hdcacl.exceptions import AclCryptoError, AclSerializationError
from hdcacl.models.acl import Acl

_logger = logging.getLogger(__name__)

MessageBuilder = Callable[[Acl], bytes]


def clear_message(acl: Acl) -> bytes:
    """Message a manager signs to clear *acl* from the device."""
    try:
        return f"{CLEAR_MESSAGE_PREFIX}{acl.fleet_name}".encode()
    except UnicodeEncodeError as exc:
        raise AclSerializationError(f"encoding clear message: {exc}") from exc


def store_message(acl: Acl) -> bytes:
    """Message a manager signs to store *acl* on the device."""
    hashable: dict[str, Any] = {}
    if acl.fleet_name:
        hashable["fleetName"] = acl.fleet_name
    hashable["managers"] = list(acl.managers)
    hashable["drivers"] = list(acl.drivers)

    digest = md5_hex(canonical_json(hashable))
    message = STORE_MESSAGE_TEMPLATE.format(
        managers=len(acl.managers),
        drivers=len(acl.drivers),
        digest=digest,
    )
    return message.encode()


def legacy_store_message(acl: Acl) -> bytes:
    """Pre-fleet-name store message: the bare ``{managers, drivers}`` JSON."""
    return canonical_json({"managers": list(acl.managers), "drivers": list(acl.drivers)})


STORE_MESSAGE_BUILDERS: tuple[MessageBuilder, ...] = (store_message, legacy_store_message)
CLEAR_MESSAGE_BUILDERS: tuple[MessageBuilder, ...] = (clear_message,)


def validate_signature(
    message: bytes,
    signature: bytes,
    managers: Sequence[str],
    scheme: SignatureScheme | None = None,
) -> bool:
    """Check *signature* over *message* against each manager in order.

    The first manager entry that cannot be parsed as a public key fails
    the whole check, even when a later manager would have verified.
    Managers listed before the malformed entry are still honoured.
    """
    scheme = scheme or DEFAULT_SCHEME
    for manager in managers:
        try:
            public_key = scheme.parse_public_key(manager)
        except AclCryptoError as exc:
            _logger.debug("Malformed manager key %s, denying: %s", short_id(manager), exc)
            return False
        if scheme.verify(public_key, message, signature):
            _logger.debug("Signature %s verified by manager %s", short_id(signature), short_id(manager))
            return True
    return False


def _validate_with(
    builders: Sequence[MessageBuilder],
    acl: Acl,
    signature: bytes,
    scheme: SignatureScheme | None,
) -> bool:
    for builder in builders:
        try:
            message = builder(acl)
        except AclSerializationError as exc:
            _logger.debug("Unable to build %s: %s", builder.__name__, exc)
            return False
        if validate_signature(message, signature, acl.managers, scheme):
            return True
    return False


def validate_store_signature(acl: Acl, signature: bytes, scheme: SignatureScheme | None = None) -> bool:
    """Whether *signature* authorizes storing *acl*, in the current or legacy form."""
    return _validate_with(STORE_MESSAGE_BUILDERS, acl, signature, scheme)


def validate_clear_signature(acl: Acl, signature: bytes, scheme: SignatureScheme | None = None) -> bool:
    """Whether *signature* authorizes clearing *acl*. There is no legacy form."""
    return _validate_with(CLEAR_MESSAGE_BUILDERS, acl, signature, scheme)
