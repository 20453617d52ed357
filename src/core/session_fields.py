"""Type-safe field parsing helpers for session execution.

This module centralizes primitive parsing so session executors stay
concise and produce consistent validation errors.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from core.errors import SessionSpecError


def required_string(args: Mapping[str, object], field_name: str) -> str:
    """Read a required string field from a session step."""
    value = optional_string(args, field_name)
    if value is None:
        raise SessionSpecError(f"Session step is missing required field '{field_name}'.")
    return value


def optional_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field from a session step."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise SessionSpecError(f"Session field '{field_name}' must be a string when provided.")


def optional_bool(
    args: Mapping[str, object],
    field_name: str,
    default_value: bool,
) -> bool:
    """Read an optional boolean field from a session step."""
    value = args.get(field_name)
    if value is None:
        return default_value
    if isinstance(value, bool):
        return value
    raise SessionSpecError(f"Session field '{field_name}' must be true/false.")


def required_rows(args: Mapping[str, object], field_name: str) -> Sequence[Mapping[str, object]]:
    """Read a required list of row mappings from a session step."""
    value = args.get(field_name)
    if not isinstance(value, list):
        raise SessionSpecError(f"Session field '{field_name}' must be a list of rows.")
    for index, row in enumerate(value, 1):
        if not isinstance(row, Mapping):
            raise SessionSpecError(
                f"Session field '{field_name}' row {index} must be a mapping, "
                f"got {type(row).__name__}."
            )
    return value
