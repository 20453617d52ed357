"""Printable rendering for query results.

This module turns query return values into stable text rows shared
by the CLI and session execution paths.
"""

from __future__ import annotations

import json
from dataclasses import is_dataclass

from store.table_io import record_to_payload


def format_query_result(query_name: str, result: object) -> tuple[str, ...]:
    """Render a query result as output lines.

    Record lists render one JSON object per line; scalars render as
    ``name=value`` with ``-`` for an absent result.

    Args:
        query_name: Query registry name.
        result: Value returned by the query.

    Returns:
        Output lines.
    """
    if isinstance(result, list):
        return tuple(format_record(record) for record in result)
    return (f"{query_name}={'-' if result is None else result}",)


def format_record(record: object) -> str:
    """Render one record as a compact, key-sorted JSON object."""
    if is_dataclass(record) and not isinstance(record, type):
        return json.dumps(record_to_payload(record), sort_keys=True)
    return json.dumps(record, sort_keys=True)
