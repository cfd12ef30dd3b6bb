"""Savepoint locator CLI entry points.
This module exposes the latest-savepoint lookup as a command.
It maps argparse options onto resolver calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Any, Sequence

from core.config import ObjectStoreConfig
from core.location import is_object_store_uri
from core.logging_config import get_logger
from locate.resolver import SavepointResolver

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="savepoint-locator",
        description="Find the most recent savepoint of a streaming job",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_latest_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the savepoint locator CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "latest":
        return _run_latest_command(args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_resolver(args: argparse.Namespace) -> SavepointResolver:
    """Build a resolver, applying object-store overrides for S3 URIs.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured resolver.
    """
    if not is_object_store_uri(args.directory):
        if args.endpoint_url or args.no_ssl or args.path_style:
            _LOGGER.debug("object_store_flags_ignored", directory=args.directory)
        return SavepointResolver()
    config = ObjectStoreConfig.from_env()
    overrides: dict[str, object] = {}
    if args.endpoint_url:
        overrides["endpoint_url"] = args.endpoint_url
    if args.no_ssl:
        overrides["use_ssl"] = False
    if args.path_style:
        overrides["force_path_style"] = True
    return SavepointResolver(object_store_config=replace(config, **overrides))


def _run_latest_command(args: argparse.Namespace) -> int:
    """Handle latest command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    savepoint = _build_resolver(args).resolve(args.directory)
    if not savepoint:
        _LOGGER.warning("no_savepoint_found", directory=args.directory)
        return 1
    print(savepoint)
    return 0


def _add_latest_command(subparsers: Any) -> None:
    """Register latest subcommand."""
    parser = subparsers.add_parser("latest", help="Print the newest savepoint in a directory")
    parser.add_argument("directory", help="Local directory or s3://bucket/prefix")
    parser.add_argument(
        "--endpoint-url",
        help="S3-compatible endpoint override (ignored for local directories)",
    )
    parser.add_argument(
        "--no-ssl",
        action="store_true",
        help="Disable TLS for the S3 endpoint (S3 only)",
    )
    parser.add_argument(
        "--path-style",
        action="store_true",
        help="Use path-style bucket addressing (S3 only)",
    )
