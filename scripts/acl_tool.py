#!/usr/bin/env python3
"""Inspect and manage the ACL of a device.

Usage
-----
    python scripts/acl_tool.py --root /data/acl show
    python scripts/acl_tool.py --root /data/acl exists
    python scripts/acl_tool.py message candidate.json
    python scripts/acl_tool.py message --clear candidate.json
    python scripts/acl_tool.py --root /data/acl store candidate.json --signature <base58>
    python scripts/acl_tool.py --root /data/acl clear [--signature <base58>]

The storage root falls back to ``HDC_ACL_ROOT`` when ``--root`` is omitted.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from hdcacl import Acl, AclConfig, AclError, AclStore, clear_message, legacy_store_message, store_message


def _read_candidate(path: Path) -> Acl:
    return Acl.from_data(path.read_bytes())


def _cmd_show(store: AclStore, config: AclConfig, _args: argparse.Namespace) -> int:
    acl = store.load(config.root)
    print(json.dumps(acl.model_dump(by_alias=True), indent=2, ensure_ascii=False))
    return 0


def _cmd_exists(store: AclStore, config: AclConfig, _args: argparse.Namespace) -> int:
    exists = store.exists(config.root)
    print("yes" if exists else "no")
    return 0 if exists else 1


def _cmd_message(args: argparse.Namespace) -> int:
    acl = _read_candidate(args.file)
    if args.clear:
        print(clear_message(acl).decode())
        return 0
    print(store_message(acl).decode())
    if args.legacy:
        print(legacy_store_message(acl).decode())
    return 0


def _cmd_store(store: AclStore, config: AclConfig, args: argparse.Namespace) -> int:
    store.store(config.root, _read_candidate(args.file), args.signature)
    print(f"Stored ACL under {config.root}")
    return 0


def _cmd_clear(store: AclStore, config: AclConfig, args: argparse.Namespace) -> int:
    store.clear(config.root, args.signature or "")
    print(f"Cleared ACL under {config.root}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect and manage a device ACL")
    parser.add_argument("--root", help="ACL storage directory (defaults to HDC_ACL_ROOT)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the stored ACL")
    sub.add_parser("exists", help="Exit 0 when an ACL is stored, 1 otherwise")

    message = sub.add_parser("message", help="Print the message a manager must sign")
    message.add_argument("file", type=Path, help="Candidate ACL JSON file")
    message.add_argument("--clear", action="store_true", help="Print the clear message instead")
    message.add_argument("--legacy", action="store_true", help="Also print the legacy store message")

    store_cmd = sub.add_parser("store", help="Store a signed candidate ACL")
    store_cmd.add_argument("file", type=Path, help="Candidate ACL JSON file")
    store_cmd.add_argument("--signature", required=True, help="Base58 manager signature")

    clear = sub.add_parser("clear", help="Clear the stored ACL")
    clear.add_argument("--signature", help="Base58 manager signature over the clear message")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "message":
            return _cmd_message(args)

        config = AclConfig.from_env(root=args.root)
        store = AclStore.from_config(config)
        handlers = {
            "show": _cmd_show,
            "exists": _cmd_exists,
            "store": _cmd_store,
            "clear": _cmd_clear,
        }
        return handlers[args.command](store, config, args)
    except (AclError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
