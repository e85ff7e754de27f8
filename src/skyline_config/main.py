#!/usr/bin/env python3
"""skyline-config: inspect and publish the boarding pass configuration"""

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path

from .adapters.config_env import build_record_store, build_resolver, load_app_config
from .async_bridge import AsyncBridge
from .core.errors import DecodeError, TransientRemoteError
from .core.schema import decode_configuration, encode_configuration
from .field_accessor import ButtonType, PlaceholderField, ValidationErrorKind, ValidationField

_LOOKUPS = {
    "pattern": ValidationField,
    "error": ValidationErrorKind,
    "placeholder": PlaceholderField,
    "button": ButtonType,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="skyline-config", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Resolve and print the current configuration")

    lookup = sub.add_parser("lookup", help="Print one configured string")
    lookup.add_argument("kind", choices=sorted(_LOOKUPS))
    lookup.add_argument("name", help="Identifier, e.g. flight_number")

    publish = sub.add_parser("publish", help="Publish a JSON file as the remote override")
    publish.add_argument("path", type=Path)
    return parser


def _wait_for_reconcile(resolver, bridge: AsyncBridge, timeout: float) -> None:
    future = resolver.start(bridge)
    try:
        future.result(timeout=timeout)
    except FutureTimeoutError:
        print("⚠ Reconciliation still running, showing current configuration")


def cmd_show(resolver, bridge: AsyncBridge, timeout: float) -> int:
    _wait_for_reconcile(resolver, bridge, timeout)
    print(f"Source: {resolver.source.value}")
    print(f"State:  {resolver.state.name}")
    print(encode_configuration(resolver.current, pretty=True).decode("utf-8"))
    return 0


def cmd_lookup(resolver, bridge: AsyncBridge, timeout: float, kind: str, name: str) -> int:
    enum_cls = _LOOKUPS[kind]
    try:
        identifier = enum_cls(name)
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        print(f"Unknown {kind} '{name}'. Valid: {valid}", file=sys.stderr)
        return 2
    _wait_for_reconcile(resolver, bridge, timeout)
    print(resolver.fields.resolve(identifier))
    return 0


def cmd_publish(resolver, bridge: AsyncBridge, timeout: float, path: Path) -> int:
    try:
        new_config = decode_configuration(path.read_bytes())
    except OSError as e:
        print(f"❌ Cannot read {path}: {e}", file=sys.stderr)
        return 1
    except DecodeError as e:
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        bridge.run_sync(resolver.publish_override(new_config), timeout=timeout)
    except (TransientRemoteError, FutureTimeoutError) as e:
        print(f"❌ Publish failed: {e}", file=sys.stderr)
        return 1

    print("✓ Configuration override published")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    app_config = load_app_config()
    logging.basicConfig(
        level=app_config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = build_record_store(app_config)
    resolver = build_resolver(app_config, store)
    # Leave headroom over the fetch timeout for the cache fallback
    timeout = app_config.remote_timeout + 5.0

    with AsyncBridge() as bridge:
        try:
            if args.command == "show":
                return cmd_show(resolver, bridge, timeout)
            if args.command == "lookup":
                return cmd_lookup(resolver, bridge, timeout, args.kind, args.name)
            return cmd_publish(resolver, bridge, timeout, args.path)
        finally:
            bridge.run_sync(store.close(), timeout=5.0)


if __name__ == "__main__":
    sys.exit(main())
