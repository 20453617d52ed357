"""In-memory table store.

This module owns the mapping from record type to its ordered rows.
It provides create, append-only insert, read, and JSON dump/load
operations for the query layer and session entry points.
"""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Callable, TypeVar, get_type_hints

from core.constants import TABLE_FILE_SUFFIX
from core.errors import TableFormatError, TableNotFoundError, TableSchemaError
from core.logging_config import get_logger
from core.types import RECORD_FIELD_TYPES, Entity
from store.table_io import is_record_type, read_table_file, table_name, write_table_file

RecordT = TypeVar("RecordT", bound=Entity)

_LOGGER = get_logger(__name__)


class TableStore:
    """Registry of typed tables keyed by record type name.

    Each table is an insertion-ordered list owned by the store. Rows
    only change through ``insert`` or a whole-table ``deserialize``.
    The store is not thread-safe.
    """

    def __init__(self) -> None:
        self._tables: dict[str, list[Any]] = {}
        self._record_types: dict[str, type] = {}

    def create_table(self, record_type: type[RecordT]) -> None:
        """Register an empty table for a record type.

        Calling this again for the same type keeps existing rows.

        Args:
            record_type: Dataclass record class with an ``id`` field.

        Raises:
            TableSchemaError: If the type is not a valid record type or
                another type already owns the same table name.
        """
        _validate_record_type(record_type)
        name = table_name(record_type)
        registered_type = self._record_types.get(name)
        if registered_type is record_type:
            return
        if registered_type is not None:
            raise TableSchemaError(
                f"Table '{name}' is already registered for "
                f"{registered_type.__module__}.{registered_type.__qualname__}. "
                "Rename one of the record types."
            )
        self._record_types[name] = record_type
        self._tables[name] = []
        _LOGGER.info("table_created", table=name)

    def has_table(self, record_type: type) -> bool:
        """Return whether a table exists for the record type."""
        return self._record_types.get(table_name(record_type)) is record_type

    def table_names(self) -> tuple[str, ...]:
        """Return registered table names in creation order."""
        return tuple(self._tables)

    def insert(self, record_type: type[RecordT], factory: Callable[[], RecordT]) -> RecordT:
        """Build one record with the factory and append it to its table.

        Args:
            record_type: Target table record type.
            factory: Zero-argument callable producing the record.

        Returns:
            The appended record.

        Raises:
            TableNotFoundError: If the table was never created.
            TableFormatError: If the factory returns another type.
        """
        rows = self._rows(record_type)
        record = factory()
        if not isinstance(record, record_type):
            raise TableFormatError(
                f"Cannot insert {type(record).__name__} into table "
                f"'{table_name(record_type)}'."
            )
        rows.append(record)
        return record

    def get_table(self, record_type: type[RecordT]) -> tuple[RecordT, ...]:
        """Return a read-only view of all rows in insertion order.

        Args:
            record_type: Table record type.

        Returns:
            Immutable tuple of the table rows.

        Raises:
            TableNotFoundError: If the table was never created.
        """
        return tuple(self._rows(record_type))

    def serialize(self, record_type: type, path: str | Path) -> None:
        """Write a table to a JSON file, replacing prior content.

        Args:
            record_type: Table record type.
            path: Destination file path.

        Raises:
            TableNotFoundError: If the table was never created.
            TableIOError: If the file cannot be written.
        """
        rows = self._rows(record_type)
        target = Path(path)
        write_table_file(target, rows)
        _LOGGER.info(
            "table_serialized",
            table=table_name(record_type),
            path=str(target),
            row_count=len(rows),
        )

    def deserialize(self, record_type: type, path: str | Path) -> None:
        """Replace a table with rows decoded from a JSON file.

        The file is fully decoded before the table is swapped, so a
        decode failure leaves existing rows untouched.

        Args:
            record_type: Table record type.
            path: Source file path.

        Raises:
            TableNotFoundError: If the table was never created.
            TableFormatError: If the content is not a valid table.
            TableIOError: If the file cannot be read.
        """
        self._rows(record_type)
        source = Path(path)
        records = read_table_file(record_type, source)
        name = table_name(record_type)
        self._tables[name] = records
        _LOGGER.info("table_deserialized", table=name, path=str(source), row_count=len(records))

    def save_tables(self, directory: str | Path) -> tuple[Path, ...]:
        """Serialize every table into ``<TableName>.json`` under a directory.

        Args:
            directory: Target directory, created when missing.

        Returns:
            Written file paths in table creation order.
        """
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for name, record_type in self._record_types.items():
            path = target_dir / f"{name}{TABLE_FILE_SUFFIX}"
            self.serialize(record_type, path)
            written.append(path)
        return tuple(written)

    def load_tables(self, directory: str | Path, missing_ok: bool = False) -> tuple[str, ...]:
        """Deserialize every registered table from a directory.

        Args:
            directory: Directory holding ``<TableName>.json`` files.
            missing_ok: Skip tables whose file does not exist.

        Returns:
            Names of tables that were loaded.
        """
        source_dir = Path(directory)
        loaded: list[str] = []
        for name, record_type in self._record_types.items():
            path = source_dir / f"{name}{TABLE_FILE_SUFFIX}"
            if missing_ok and not path.exists():
                continue
            self.deserialize(record_type, path)
            loaded.append(name)
        return tuple(loaded)

    def _rows(self, record_type: type) -> list[Any]:
        name = table_name(record_type)
        if self._record_types.get(name) is not record_type:
            raise TableNotFoundError(
                f"Table '{name}' doesn't exist. Call create_table before using it."
            )
        return self._tables[name]


def _validate_record_type(record_type: object) -> None:
    if not is_record_type(record_type):
        raise TableSchemaError(
            f"Record type {record_type!r} must be a dataclass. "
            "Declare records with @dataclass."
        )
    field_names = {field.name for field in fields(record_type)}  # type: ignore[arg-type]
    if "id" not in field_names:
        raise TableSchemaError(
            f"Record type {record_type.__name__} must declare an 'id' field."  # type: ignore[union-attr]
        )
    hints = get_type_hints(record_type)
    unsupported = sorted(
        field_name
        for field_name in field_names
        if hints.get(field_name) not in RECORD_FIELD_TYPES
    )
    if unsupported:
        raise TableSchemaError(
            f"Record type {record_type.__name__} has fields {unsupported} "  # type: ignore[union-attr]
            "that are not int, float, str, or bool."
        )
