"""Retail-tables CLI entry points.
This module exposes session, query, and table listing commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.session_command import add_session_command, run_session_command
from core.config import RetailConfig
from core.types import RETAIL_RECORD_TYPES
from queries.result_rows import format_query_result
from queries.retail_queries import supported_queries
from store.table_sdk import RetailClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="retail-tables", description="Retail tables CLI")
    parser.add_argument("--data-root", help="Override RETAIL_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_session_command(subparsers)
    _add_query_command(subparsers)
    _add_tables_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the retail-tables CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    client = _build_client(args.data_root)
    if args.command == "run-session":
        return run_session_command(client, args)
    if args.command == "query":
        return _run_query_command(client, args)
    if args.command == "tables":
        return _run_tables_command(client)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> RetailClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = RetailConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return RetailClient(config)


def _run_query_command(client: RetailClient, args: argparse.Namespace) -> int:
    """Handle query command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    client.open_all()
    for line in format_query_result(args.name, client.query(args.name)):
        print(line)
    return 0


def _run_tables_command(client: RetailClient) -> int:
    """Handle tables command.

    Args:
        client: SDK client.

    Returns:
        Exit code.
    """
    loaded_tables = set(client.open_all())
    for table in RETAIL_RECORD_TYPES:
        if table in loaded_tables:
            print(f"{table}\t{len(client.rows(table))}\t{client.table_path(table)}")
        else:
            print(f"{table}\t-\t{client.table_path(table)}")
    return 0


def _add_query_command(subparsers: Any) -> None:
    """Register query subcommand."""
    parser = subparsers.add_parser("query", help="Run one named query over saved tables")
    parser.add_argument("name", choices=supported_queries(), help="Query name")


def _add_tables_command(subparsers: Any) -> None:
    """Register tables subcommand."""
    subparsers.add_parser("tables", help="List table files and row counts")
