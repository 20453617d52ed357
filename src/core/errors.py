"""Retail-tables exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class RetailTablesError(Exception):
    """Base exception for all retail-tables failures."""


class RetailConfigError(RetailTablesError):
    """Raised for invalid runtime configuration."""


class TableStoreError(RetailTablesError):
    """Raised for table store and persistence failures."""


class TableNotFoundError(TableStoreError):
    """Raised when an operation references a table that was never created."""


class TableFormatError(TableStoreError):
    """Raised when table content cannot be decoded into the record shape."""


class TableIOError(TableStoreError):
    """Raised when reading or writing a table file fails."""


class TableSchemaError(TableStoreError):
    """Raised when two record types claim the same table name."""


class QueryError(RetailTablesError):
    """Raised for unknown or unsupported query requests."""


class RetailDependencyError(RetailTablesError):
    """Raised when an optional runtime dependency is missing."""


class SessionSpecError(RetailTablesError):
    """Raised for invalid or unsupported session-file configuration."""
