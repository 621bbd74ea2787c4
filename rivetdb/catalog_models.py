"""Catalog records and the interface every catalog manager implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any


class CatalogError(Exception):
    """A catalog operation failed."""


class NotFoundError(CatalogError):
    """A connection or table named in a catalog operation does not exist."""


@dataclass(frozen=True)
class ConnectionInfo:
    """A registered remote data source."""

    id: int
    name: str
    source_type: str
    config_json: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TableInfo:
    """A table known to the catalog, with its cache state."""

    id: int
    connection_id: int
    schema_name: str
    table_name: str
    parquet_path: str | None = None
    state_path: str | None = None
    last_sync: str | None = None
    arrow_schema_json: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class CatalogManager(ABC):
    """Synchronous interface for catalog operations."""

    def close(self) -> None:
        """Close the catalog connection; safe to call more than once."""

    @abstractmethod
    def run_migrations(self) -> None:
        """Apply any pending schema migrations."""

    @abstractmethod
    def list_connections(self) -> list[ConnectionInfo]:
        """Return all connections ordered by name."""

    @abstractmethod
    def add_connection(self, name: str, source_type: str, config_json: str) -> int:
        """Register a connection and return its id."""

    @abstractmethod
    def get_connection(self, name: str) -> ConnectionInfo | None:
        """Return the connection with this name, or None."""

    @abstractmethod
    def add_table(
        self, connection_id: int, schema_name: str, table_name: str, arrow_schema_json: str
    ) -> int:
        """Register or update a table and return its id."""

    @abstractmethod
    def list_tables(self, connection_id: int | None = None) -> list[TableInfo]:
        """Return tables, optionally of one connection, ordered by schema and name."""

    @abstractmethod
    def get_table(self, connection_id: int, schema_name: str, table_name: str) -> TableInfo | None:
        """Return one table, or None."""

    @abstractmethod
    def update_table_sync(self, table_id: int, parquet_path: str, state_path: str) -> None:
        """Record a completed sync of a table."""

    @abstractmethod
    def clear_table_cache_metadata(
        self, connection_id: int, schema_name: str, table_name: str
    ) -> TableInfo:
        """Clear a table's cache paths without deleting files; return the table as it was."""

    @abstractmethod
    def clear_connection_cache_metadata(self, name: str) -> None:
        """Clear cache paths of every table of a connection."""

    @abstractmethod
    def delete_connection(self, name: str) -> None:
        """Delete a connection and all of its table rows."""