from __future__ import annotations

import pytest

from hdcacl._crypto.hashing import canonical_json, md5_hex
from hdcacl.exceptions import AclSerializationError


def test_canonical_json_is_compact_and_ordered() -> None:
    payload = {"fleetName": "f", "managers": ["a", "b"], "drivers": []}
    assert canonical_json(payload) == b'{"fleetName":"f","managers":["a","b"],"drivers":[]}'


def test_canonical_json_uses_html_safe_escapes() -> None:
    encoded = canonical_json({"fleetName": "<a&b>"})
    assert encoded == b'{"fleetName":"\\u003ca\\u0026b\\u003e"}'


def test_canonical_json_escapes_line_and_paragraph_separators() -> None:
    encoded = canonical_json({"fleetName": "a\u2028b\u2029c"})
    assert encoded == b'{"fleetName":"a\\u2028b\\u2029c"}'


def test_canonical_json_keeps_non_ascii_as_utf8() -> None:
    assert canonical_json({"fleetName": "Zürich"}) == '{"fleetName":"Zürich"}'.encode()


def test_canonical_json_rejects_unserializable_values() -> None:
    with pytest.raises(AclSerializationError):
        canonical_json({"managers": {object()}})


def test_md5_hex_is_lowercase() -> None:
    assert md5_hex(b"") == "d41d8cd98f00b204e9800998ecf8427e"
    assert md5_hex(b"abc") == "900150983cd24fb0d6963f7d28e17f72"


def test_canonical_json_rejects_unencodable_strings() -> None:
    with pytest.raises(AclSerializationError):
        canonical_json({"fleetName": "fleet\ud800"})
