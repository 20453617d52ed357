"""Shared session execution engine for CLI and SDK workflows.

This module maps validated session steps to client operations so
different entry points execute one declarative session path.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Protocol, Sequence

from core.errors import SessionSpecError
from core.logging_config import get_logger
from core.session_fields import optional_bool, optional_string, required_rows, required_string
from core.session_spec import SessionSpec, SessionStep, load_session_spec
from queries.result_rows import format_query_result, format_record

_LOGGER = get_logger(__name__)


class SessionClient(Protocol):
    """Client API contract required by session execution."""

    def with_data_root(self, data_root: str) -> Any: ...

    def create_table(self, table: str) -> None: ...

    def insert_rows(self, table: str, rows: Sequence[Mapping[str, Any]]) -> int: ...

    def rows(self, table: str) -> tuple[Any, ...]: ...

    def save(self, table: str | None = None) -> tuple[Path, ...]: ...

    def load(self, table: str | None = None, missing_ok: bool = False) -> tuple[str, ...]: ...

    def query(self, query_name: str) -> Any: ...


@dataclass(frozen=True)
class SessionExecutionContext:
    """In-memory context used to execute session steps."""

    client: SessionClient


def execute_session_file(client: SessionClient, spec_file: str) -> tuple[str, ...]:
    """Load and execute a session file, returning printable output lines."""
    spec = load_session_spec(spec_file)
    return execute_session(client, spec)


def execute_session(client: SessionClient, spec: SessionSpec) -> tuple[str, ...]:
    """Execute a parsed session object and return output lines."""
    execution_client = (
        client.with_data_root(spec.defaults.data_root) if spec.defaults.data_root else client
    )
    context = SessionExecutionContext(client=execution_client)
    output_lines: list[str] = []
    for index, step in enumerate(spec.steps, 1):
        output_lines.extend(_execute_step(context, step))
        _LOGGER.debug("session_step_executed", step=index, command=step.command)
    return tuple(output_lines)


def _execute_step(context: SessionExecutionContext, step: SessionStep) -> tuple[str, ...]:
    if step.command == "create-table":
        context.client.create_table(required_string(step.args, "table"))
        return ()
    if step.command == "insert":
        return (_execute_insert_step(context, step),)
    if step.command == "save":
        paths = context.client.save(optional_string(step.args, "table"))
        return tuple(f"saved={path}" for path in paths)
    if step.command == "load":
        tables = context.client.load(
            optional_string(step.args, "table"),
            missing_ok=optional_bool(step.args, "missing_ok", default_value=False),
        )
        return tuple(f"loaded={table}" for table in tables)
    if step.command == "show":
        rows = context.client.rows(required_string(step.args, "table"))
        return tuple(format_record(row) for row in rows)
    if step.command == "query":
        query_name = required_string(step.args, "name")
        return format_query_result(query_name, context.client.query(query_name))
    raise SessionSpecError(f"Unsupported session command '{step.command}'.")


def _execute_insert_step(context: SessionExecutionContext, step: SessionStep) -> str:
    table = required_string(step.args, "table")
    inserted = context.client.insert_rows(table, required_rows(step.args, "rows"))
    return f"inserted={table}:{inserted}"
