"""Session CLI command wiring.

This module registers the run-session subcommand and delegates execution
to the shared session engine used by CLI and SDK entry points.
"""

from __future__ import annotations

import argparse
from typing import Any

from core.session_execution import execute_session_file
from store.table_sdk import RetailClient


def add_session_command(subparsers: Any) -> None:
    """Register run-session subcommand."""
    parser = subparsers.add_parser(
        "run-session",
        help="Run a declarative YAML table session",
    )
    parser.add_argument("session_file", help="Path to YAML session file")


def run_session_command(client: RetailClient, args: argparse.Namespace) -> int:
    """Handle run-session command invocation."""
    output_lines = execute_session_file(client, args.session_file)
    for line in output_lines:
        print(line)
    return 0
