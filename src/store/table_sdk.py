"""Python SDK for retail table sessions.

This module exposes a name-based client over the table store so CLI
commands and session files can address tables and queries by string.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping, Sequence

from core.config import RetailConfig
from core.constants import TABLE_FILE_SUFFIX
from core.errors import TableNotFoundError
from core.types import RETAIL_RECORD_TYPES
from queries.retail_queries import run_named_query
from store.table_io import record_from_payload
from store.table_store import TableStore


class RetailClient:
    """Primary SDK entry point for retail table sessions."""

    def __init__(self, config: RetailConfig | None = None, store: TableStore | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            store: Optional existing store to operate on.
        """
        self._config = config or RetailConfig.from_env()
        self._store = store or TableStore()

    @property
    def config(self) -> RetailConfig:
        """Return the active runtime configuration."""
        return self._config

    @property
    def store(self) -> TableStore:
        """Return the underlying table store."""
        return self._store

    def with_data_root(self, data_root: str) -> "RetailClient":
        """Return a client sharing this store with another data root.

        Args:
            data_root: Directory for table JSON files.

        Returns:
            New client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        return RetailClient(replace(self._config, data_root=resolved_root), self._store)

    def create_table(self, table: str) -> None:
        """Create a table by record type name."""
        self._store.create_table(resolve_record_type(table))

    def insert_rows(self, table: str, rows: Sequence[Mapping[str, Any]]) -> int:
        """Validate and append payload rows to a table.

        Args:
            table: Record type name.
            rows: Row payloads keyed by record attribute names.

        Returns:
            Number of inserted rows.

        Raises:
            TableNotFoundError: If the table was never created.
            TableFormatError: If a row does not match the record shape.
        """
        record_type = resolve_record_type(table)
        start_count = len(self._store.get_table(record_type))
        records = [
            record_from_payload(record_type, row, start_count + offset)
            for offset, row in enumerate(rows, 1)
        ]
        for record in records:
            self._store.insert(record_type, lambda record=record: record)
        return len(records)

    def rows(self, table: str) -> tuple[Any, ...]:
        """Return all rows of a table."""
        return self._store.get_table(resolve_record_type(table))

    def save(self, table: str | None = None) -> tuple[Path, ...]:
        """Serialize one table, or every table, under the data root.

        Args:
            table: Optional record type name; all tables when omitted.

        Returns:
            Written file paths.
        """
        if table is None:
            return self._store.save_tables(self._config.data_root)
        record_type = resolve_record_type(table)
        self._config.data_root.mkdir(parents=True, exist_ok=True)
        path = self.table_path(table)
        self._store.serialize(record_type, path)
        return (path,)

    def load(self, table: str | None = None, missing_ok: bool = False) -> tuple[str, ...]:
        """Deserialize one table, or every table, from the data root.

        Args:
            table: Optional record type name; all tables when omitted.
            missing_ok: Skip tables whose file does not exist.

        Returns:
            Names of loaded tables.
        """
        if table is None:
            return self._store.load_tables(self._config.data_root, missing_ok=missing_ok)
        path = self.table_path(table)
        if missing_ok and not path.exists():
            return ()
        self._store.deserialize(resolve_record_type(table), path)
        return (table,)

    def open_all(self) -> tuple[str, ...]:
        """Create every retail table and load those present on disk."""
        for table in RETAIL_RECORD_TYPES:
            self.create_table(table)
        return self.load(missing_ok=True)

    def query(self, query_name: str) -> Any:
        """Run a named query against the store."""
        return run_named_query(
            self._store,
            query_name,
            top_buyers_limit=self._config.top_buyers_limit,
        )

    def table_path(self, table: str) -> Path:
        """Return the JSON file path for a table under the data root."""
        return self._config.data_root / f"{table}{TABLE_FILE_SUFFIX}"


def resolve_record_type(table: str) -> type:
    """Map a table name onto its retail record type.

    Raises:
        TableNotFoundError: If no retail record type has that name.
    """
    record_type = RETAIL_RECORD_TYPES.get(table)
    if record_type is None:
        supported_rows = ", ".join(RETAIL_RECORD_TYPES)
        raise TableNotFoundError(
            f"Unknown table '{table}'. Use one of: {supported_rows}."
        )
    return record_type
