#!/usr/bin/env python3
"""
cli.py — fedcanon command line

Commands:
  canonicalize         Print the canonical JSON form of a document
  hash                 Print the SHA-256 of a document's canonical form
  check-device-key-id  Validate a device key id ("<algorithm>:<key id>")
  check-server-key-id  Validate a server signing key id ("<algorithm>:<version>")
  algorithms           List recognized key algorithms
"""

from __future__ import annotations
import argparse
import sys
from typing import Optional

from . import device_key_id, server_key_id
from .canonical_json import MAX_NESTING_DEPTH, canonical_hash, loads, render
from .errors import FedcanonError
from .key_algorithms import device_key_algorithms, signing_key_algorithms


def _fail_with_error(err: FedcanonError) -> None:
    """Print a structured error message from a ``FedcanonError`` and exit.

    Args:
        err: Structured validation error.

    Returns:
        None: This function terminates the process.
    """
    context = f" Context: {err.context}." if err.context else ""
    print(f"ERROR: {err.code}. {err.message}.{context}", file=sys.stderr)
    sys.exit(1)


def _read_input(path: Optional[str]) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def cmd_canonicalize(args: argparse.Namespace) -> None:
    try:
        value = loads(_read_input(args.file), max_depth=args.max_depth)
    except FedcanonError as e:
        _fail_with_error(e)
    print(render(value))


def cmd_hash(args: argparse.Namespace) -> None:
    try:
        value = loads(_read_input(args.file), max_depth=args.max_depth)
    except FedcanonError as e:
        _fail_with_error(e)
    print(canonical_hash(value))


def cmd_check_device_key_id(args: argparse.Namespace) -> None:
    device_key_algorithms.discover()
    try:
        algorithm, key_id = device_key_id.split(args.key_id)
    except FedcanonError as e:
        _fail_with_error(e)
    print(f"OK algorithm={algorithm} key_id={key_id}")


def cmd_check_server_key_id(args: argparse.Namespace) -> None:
    signing_key_algorithms.discover()
    try:
        idx = server_key_id.validate(args.key_id)
    except FedcanonError as e:
        _fail_with_error(e)
    print(f"OK algorithm={args.key_id[:idx]} version={args.key_id[idx + 1:]}")


def cmd_algorithms(args: argparse.Namespace) -> None:
    device_key_algorithms.discover()
    signing_key_algorithms.discover()
    print("device: " + " ".join(device_key_algorithms.names()))
    print("signing: " + " ".join(signing_key_algorithms.names()))


def main(argv: Optional[list] = None) -> None:
    """CLI entrypoint.

    Parses command-line arguments and routes to a subcommand handler.
    Validation failures exit with status 1.
    """
    parser = argparse.ArgumentParser(prog="fedcanon", description="Canonical JSON and key id tools")
    sub = parser.add_subparsers(dest="command", required=True)

    # canonicalize
    p_canon = sub.add_parser("canonicalize", help="Print canonical JSON")
    p_canon.add_argument("file", nargs="?", help="JSON file (stdin if omitted)")
    p_canon.add_argument("--max-depth", type=int, default=MAX_NESTING_DEPTH, help="Maximum nesting depth")

    # hash
    p_hash = sub.add_parser("hash", help="Print SHA-256 of canonical JSON")
    p_hash.add_argument("file", nargs="?", help="JSON file (stdin if omitted)")
    p_hash.add_argument("--max-depth", type=int, default=MAX_NESTING_DEPTH, help="Maximum nesting depth")

    # key ids
    p_dev = sub.add_parser("check-device-key-id", help="Validate a device key id")
    p_dev.add_argument("key_id", help="e.g. ed25519:ABCDEF")
    p_srv = sub.add_parser("check-server-key-id", help="Validate a server signing key id")
    p_srv.add_argument("key_id", help="e.g. ed25519:key_1")

    sub.add_parser("algorithms", help="List recognized key algorithms")

    args = parser.parse_args(argv)

    if args.command == "canonicalize": cmd_canonicalize(args)
    elif args.command == "hash": cmd_hash(args)
    elif args.command == "check-device-key-id": cmd_check_device_key_id(args)
    elif args.command == "check-server-key-id": cmd_check_server_key_id(args)
    elif args.command == "algorithms": cmd_algorithms(args)


if __name__ == "__main__":
    main()
