"""Catalog manager stored in a SQLite database."""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Callable, Iterator
from contextlib import closing, contextmanager
from typing import Any, TypeVar

from rivetdb.catalog_backend import CatalogBackend, sqlite_placeholder
from rivetdb.catalog_models import CatalogError, CatalogManager, ConnectionInfo, TableInfo
from rivetdb.migrations import CatalogMigrations, run_migrations

T = TypeVar("T")

_SCHEMA_V1 = (
    """
    CREATE TABLE IF NOT EXISTS connections (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT UNIQUE NOT NULL,
        source_type TEXT NOT NULL,
        config_json TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tables (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        connection_id INTEGER NOT NULL,
        schema_name TEXT NOT NULL,
        table_name TEXT NOT NULL,
        parquet_path TEXT,
        state_path TEXT,
        last_sync TIMESTAMP,
        arrow_schema_json TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (connection_id) REFERENCES connections(id),
        UNIQUE (connection_id, schema_name, table_name)
    )
    """,
)


class SqliteMigrations(CatalogMigrations):
    """Migration steps for a SQLite catalog."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection

    def _run(self, sql: str, params: tuple = ()) -> None:
        with closing(self.connection.cursor()) as cursor:
            cursor.execute(sql, params)
        self.connection.commit()

    def ensure_migrations_table(self) -> None:
        self._run(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                version INTEGER PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

    def current_version(self) -> int:
        with closing(self.connection.cursor()) as cursor:
            cursor.execute("SELECT COALESCE(MAX(version), 0) FROM schema_migrations")
            return int(cursor.fetchone()[0])

    def record_version(self, version: int) -> None:
        self._run("INSERT INTO schema_migrations (version) VALUES (?)", (version,))

    def migrate_v1(self) -> None:
        for statement in _SCHEMA_V1:
            self._run(statement)


class SqliteCatalogManager(CatalogManager):
    """A catalog kept in a SQLite file, created if it does not exist."""

    def __init__(self, db_path: str) -> None:
        self.catalog_path = db_path
        try:
            connection = sqlite3.connect(db_path, check_same_thread=False)
            connection.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as exc:
            raise CatalogError(f"cannot open catalog '{db_path}': {exc}") from exc
        self._connection = connection
        self._backend = CatalogBackend(connection, sqlite_placeholder)
        self._lock = threading.Lock()
        self._closed = False

    def __repr__(self) -> str:
        return f"SqliteCatalogManager(catalog_path={self.catalog_path!r})"

    def __enter__(self) -> SqliteCatalogManager:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @contextmanager
    def _guarded(self) -> Iterator[None]:
        with self._lock:
            if self._closed:
                raise CatalogError("catalog is closed")
            try:
                yield
            except sqlite3.Error as exc:
                raise CatalogError(str(exc)) from exc

    def _call(self, operation: Callable[..., T], *args: Any) -> T:
        with self._guarded():
            return operation(*args)

    def close(self) -> None:
        with self._lock:
            if not self._closed:
                self._closed = True
                self._connection.close()

    def run_migrations(self) -> None:
        self._call(run_migrations, SqliteMigrations(self._connection))

    def list_connections(self) -> list[ConnectionInfo]:
        return self._call(self._backend.list_connections)

    def add_connection(self, name: str, source_type: str, config_json: str) -> int:
        return self._call(self._backend.add_connection, name, source_type, config_json)

    def get_connection(self, name: str) -> ConnectionInfo | None:
        return self._call(self._backend.get_connection, name)

    def add_table(
        self, connection_id: int, schema_name: str, table_name: str, arrow_schema_json: str
    ) -> int:
        return self._call(
            self._backend.add_table, connection_id, schema_name, table_name, arrow_schema_json
        )

    def list_tables(self, connection_id: int | None = None) -> list[TableInfo]:
        return self._call(self._backend.list_tables, connection_id)

    def get_table(self, connection_id: int, schema_name: str, table_name: str) -> TableInfo | None:
        return self._call(self._backend.get_table, connection_id, schema_name, table_name)

    def update_table_sync(self, table_id: int, parquet_path: str, state_path: str) -> None:
        self._call(self._backend.update_table_sync, table_id, parquet_path, state_path)

    def clear_table_cache_metadata(
        self, connection_id: int, schema_name: str, table_name: str
    ) -> TableInfo:
        return self._call(
            self._backend.clear_table_cache_metadata, connection_id, schema_name, table_name
        )

    def clear_connection_cache_metadata(self, name: str) -> None:
        self._call(self._backend.clear_connection_cache_metadata, name)

    def delete_connection(self, name: str) -> None:
        self._call(self._backend.delete_connection, name)