from __future__ import annotations

import pytest

from hdcacl.config import AclConfig
from hdcacl.exceptions import AclConfigError


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HDC_ACL_ROOT", "/data/acl")
    monkeypatch.setenv("HDC_ACL_FILE_NAME", "custom.data")
    monkeypatch.setenv("HDC_ACL_FILE_MODE", "600")

    config = AclConfig.from_env()

    assert config.root == "/data/acl"
    assert config.file_name == "custom.data"
    assert config.file_mode == 0o600


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HDC_ACL_ROOT", "/data/acl")
    monkeypatch.delenv("HDC_ACL_FILE_NAME", raising=False)
    monkeypatch.delenv("HDC_ACL_FILE_MODE", raising=False)

    config = AclConfig.from_env()

    assert config.file_name == "acl.data"
    assert config.file_mode == 0o644


def test_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HDC_ACL_ROOT", "/data/acl")
    monkeypatch.setenv("HDC_ACL_FILE_MODE", "not-octal")

    config = AclConfig.from_env(root="/mnt/device", file_mode=0o640)

    assert config.root == "/mnt/device"
    assert config.file_mode == 0o640


def test_missing_root_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HDC_ACL_ROOT", raising=False)
    with pytest.raises(AclConfigError, match="HDC_ACL_ROOT"):
        AclConfig.from_env()


def test_invalid_file_mode_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HDC_ACL_ROOT", "/data/acl")
    monkeypatch.setenv("HDC_ACL_FILE_MODE", "rw-r--r--")
    with pytest.raises(AclConfigError):
        AclConfig.from_env()
