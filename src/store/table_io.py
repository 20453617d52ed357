"""Table JSON persistence helpers.

This module isolates record payload conversion and table file IO.
It keeps the table store focused on registry and ordering rules.
"""

from __future__ import annotations

import json
from dataclasses import asdict, fields, is_dataclass
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

from core.constants import JSON_INDENT
from core.errors import TableFormatError, TableIOError
from core.types import Entity

RecordT = TypeVar("RecordT", bound=Entity)


def table_name(record_type: type) -> str:
    """Return the stable table name for a record type.

    Args:
        record_type: Record class.

    Returns:
        Table name used as the store key and file stem.
    """
    return record_type.__name__


def record_to_payload(record: Entity) -> dict[str, Any]:
    """Serialize a dataclass record into a JSON-safe payload.

    Args:
        record: Dataclass record instance.

    Returns:
        Dictionary keyed by record attribute names.
    """
    return asdict(record)  # type: ignore[arg-type]


def record_from_payload(
    record_type: type[RecordT],
    payload: object,
    row_number: int,
) -> RecordT:
    """Deserialize one JSON payload into a typed record.

    Args:
        record_type: Dataclass record class.
        payload: Decoded JSON value for one row.
        row_number: One-based row position, used in error messages.

    Returns:
        Parsed record instance.

    Raises:
        TableFormatError: If the payload does not match the record shape.
    """
    name = table_name(record_type)
    if not isinstance(payload, dict):
        raise TableFormatError(
            f"Invalid {name} row {row_number}: expected JSON object, "
            f"got {type(payload).__name__}."
        )
    field_names = [field.name for field in fields(record_type)]  # type: ignore[arg-type]
    missing = [field_name for field_name in field_names if field_name not in payload]
    unknown = sorted(set(payload) - set(field_names))
    if missing or unknown:
        raise TableFormatError(
            f"Invalid {name} row {row_number}: "
            f"missing fields {missing or '-'}, unknown fields {unknown or '-'}."
        )
    hints = get_type_hints(record_type)
    values = {
        field_name: _checked_value(name, row_number, field_name, payload[field_name], hints)
        for field_name in field_names
    }
    return record_type(**values)


def write_table_file(path: Path, records: list[Any]) -> None:
    """Write table records as an indented JSON array, overwriting the file.

    Args:
        path: Output JSON file path.
        records: Records to serialize, in table order.

    Raises:
        TableFormatError: If a record holds a value JSON cannot encode.
        TableIOError: If the file cannot be written.
    """
    payload = [record_to_payload(record) for record in records]
    try:
        text = json.dumps(payload, indent=JSON_INDENT) + "\n"
    except (TypeError, ValueError) as error:
        raise TableFormatError(
            f"Failed to encode table for {path}: {error}. "
            "Store only int, float, str, or bool field values."
        ) from error
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as error:
        raise TableIOError(
            f"Failed to write table file at {path}: {error}. "
            "Check the directory exists and is writable."
        ) from error


def read_table_file(record_type: type[RecordT], path: Path) -> list[RecordT]:
    """Read and validate a table JSON file.

    A JSON ``null`` document decodes to an empty table.

    Args:
        record_type: Dataclass record class for every row.
        path: Input JSON file path.

    Returns:
        Parsed records in file order.

    Raises:
        TableIOError: If the file cannot be read.
        TableFormatError: If the file content is not a valid table.
    """
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as error:
        raise TableIOError(
            f"Failed to read table file at {path}: {error}. "
            "Check the path and file permissions."
        ) from error
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as error:
        raise TableFormatError(
            f"Failed to parse table file at {path}: {error.msg}. "
            "Recreate the file with serialize."
        ) from error
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise TableFormatError(
            f"Failed to parse table file at {path}: "
            "expected JSON array at top level."
        )
    return [
        record_from_payload(record_type, row, row_number)
        for row_number, row in enumerate(payload, 1)
    ]


def is_record_type(record_type: object) -> bool:
    """Return whether a value can be used as a table record type."""
    return isinstance(record_type, type) and is_dataclass(record_type)


def _checked_value(
    name: str,
    row_number: int,
    field_name: str,
    value: object,
    hints: dict[str, Any],
) -> object:
    expected = hints.get(field_name)
    if expected is bool:
        valid = isinstance(value, bool)
    elif expected is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    elif expected is float:
        valid = isinstance(value, (int, float)) and not isinstance(value, bool)
    elif expected is str:
        valid = isinstance(value, str)
    else:
        valid = True
    if not valid:
        raise TableFormatError(
            f"Invalid {name} row {row_number}: field '{field_name}' expected "
            f"{getattr(expected, '__name__', expected)}, got {type(value).__name__}."
        )
    return value
