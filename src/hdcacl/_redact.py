"""Helpers for safe debug logging.

Manager identities and signatures are long Base58 strings. Logging them in
full adds noise and leaks proof material into log aggregation, so log lines
only carry a short prefix.
"""

from __future__ import annotations

from collections.abc import Iterable

import base58


def short_id(value: str | bytes, *, keep: int = 6) -> str:
    """Return a shortened representation of a key or signature for logs."""
    if isinstance(value, (bytes, bytearray)):
        if not value:
            return "<empty>"
        value = base58.b58encode(bytes(value)).decode("ascii")
    if not value:
        return "<empty>"
    if len(value) <= keep:
        return value
    return f"{value[:keep]}…"


def short_ids(values: Iterable[str], *, keep: int = 6) -> list[str]:
    """Shorten every identity in *values*."""
    return [short_id(v, keep=keep) for v in values]
