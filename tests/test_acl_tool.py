from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING

import pytest

from hdcacl.authorization import store_message
from hdcacl.models.acl import Acl

if TYPE_CHECKING:
    from conftest import Signer

_TOOL_PATH = Path(__file__).resolve().parents[1] / "scripts" / "acl_tool.py"


@pytest.fixture
def acl_tool() -> ModuleType:
    spec = importlib.util.spec_from_file_location("acl_tool", _TOOL_PATH)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _run(acl_tool: ModuleType, monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    monkeypatch.delenv("HDC_ACL_ROOT", raising=False)
    monkeypatch.setattr(sys, "argv", ["acl_tool.py", *argv])
    return acl_tool.main()


def test_message_prints_store_message(
    acl_tool: ModuleType, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    acl = Acl(managers=["M1"], fleet_name="fleet1")
    candidate = tmp_path / "candidate.json"
    candidate.write_bytes(acl.to_json())

    assert _run(acl_tool, monkeypatch, "message", str(candidate)) == 0
    assert capsys.readouterr().out.strip() == store_message(acl).decode()


def test_missing_candidate_file_reports_error(
    acl_tool: ModuleType, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    assert _run(acl_tool, monkeypatch, "message", str(tmp_path / "missing.json")) == 2
    assert capsys.readouterr().err.startswith("error:")


def test_store_with_unreadable_candidate_writes_nothing(
    acl_tool: ModuleType, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    root = tmp_path / "acl"
    code = _run(acl_tool, monkeypatch, "--root", str(root), "store", str(tmp_path / "missing.json"), "--signature", "x")

    assert code == 2
    assert capsys.readouterr().err.startswith("error:")
    assert not root.exists()


def test_store_then_show(
    acl_tool: ModuleType,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
    manager: Signer,
) -> None:
    acl = Acl(version="1", managers=[manager.identity])
    candidate = tmp_path / "candidate.json"
    candidate.write_bytes(acl.to_json())
    signature = manager.sign_b58(store_message(acl))
    root = tmp_path / "acl"

    assert _run(acl_tool, monkeypatch, "--root", str(root), "store", str(candidate), "--signature", signature) == 0
    assert _run(acl_tool, monkeypatch, "--root", str(root), "show") == 0
    assert manager.identity in capsys.readouterr().out
