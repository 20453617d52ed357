"""Unit tests for the public SDK surface."""

from __future__ import annotations

import retail_tables
from core.errors import QueryError, SessionSpecError, TableSchemaError


def test_public_surface_exports_raised_errors() -> None:
    """Errors raised by the public API should be importable from the SDK."""
    assert retail_tables.TableSchemaError is TableSchemaError
    assert retail_tables.QueryError is QueryError
    assert retail_tables.SessionSpecError is SessionSpecError
    assert {"TableSchemaError", "QueryError", "SessionSpecError"} <= set(retail_tables.__all__)
