"""Catalog operations over any DB-API connection."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import closing
from typing import Any

from rivetdb.catalog_models import CatalogError, ConnectionInfo, NotFoundError, TableInfo

Placeholder = Callable[[int], str]

_TABLE_COLUMNS = (
    "id, connection_id, schema_name, table_name, parquet_path, state_path, "
    "CAST(last_sync AS TEXT) as last_sync, arrow_schema_json"
)
_CONNECTION_COLUMNS = "id, name, source_type, config_json"


def sqlite_placeholder(index: int) -> str:
    """SQLite uses ``?`` for every parameter."""
    return "?"


def postgres_placeholder(index: int) -> str:
    """Postgres numbers its parameters from 1: ``$1``, ``$2``, ..."""
    return f"${index}"


class CatalogBackend:
    """Catalog queries on a DB-API connection, with the backend's placeholder style."""

    def __init__(self, connection: Any, placeholder: Placeholder = sqlite_placeholder) -> None:
        self.connection = connection
        self._placeholder = placeholder

    def _params(self, count: int) -> list[str]:
        return [self._placeholder(i) for i in range(1, count + 1)]

    def _fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[tuple]:
        with closing(self.connection.cursor()) as cursor:
            cursor.execute(sql, tuple(params))
            return list(cursor.fetchall())

    def _fetch_optional(self, sql: str, params: Sequence[Any]) -> tuple | None:
        with closing(self.connection.cursor()) as cursor:
            cursor.execute(sql, tuple(params))
            return cursor.fetchone()

    def _fetch_id(self, sql: str, params: Sequence[Any]) -> int:
        row = self._fetch_optional(sql, params)
        if row is None:
            raise CatalogError("no rows returned by a query that expected to return at least one row")
        return int(row[0])

    def _execute(self, sql: str, params: Sequence[Any]) -> None:
        with closing(self.connection.cursor()) as cursor:
            cursor.execute(sql, tuple(params))
        self.connection.commit()

    def list_connections(self) -> list[ConnectionInfo]:
        rows = self._fetch_all(f"SELECT {_CONNECTION_COLUMNS} FROM connections ORDER BY name")
        return [ConnectionInfo(*row) for row in rows]

    def add_connection(self, name: str, source_type: str, config_json: str) -> int:
        p1, p2, p3 = self._params(3)
        self._execute(
            f"INSERT INTO connections (name, source_type, config_json) VALUES ({p1}, {p2}, {p3})",
            (name, source_type, config_json),
        )
        return self._fetch_id(f"SELECT id FROM connections WHERE name = {p1}", (name,))

    def get_connection(self, name: str) -> ConnectionInfo | None:
        (p1,) = self._params(1)
        row = self._fetch_optional(
            f"SELECT {_CONNECTION_COLUMNS} FROM connections WHERE name = {p1}", (name,)
        )
        return None if row is None else ConnectionInfo(*row)

    def add_table(
        self, connection_id: int, schema_name: str, table_name: str, arrow_schema_json: str
    ) -> int:
        p1, p2, p3, p4 = self._params(4)
        self._execute(
            "INSERT INTO tables (connection_id, schema_name, table_name, arrow_schema_json) "
            f"VALUES ({p1}, {p2}, {p3}, {p4}) "
            "ON CONFLICT (connection_id, schema_name, table_name) "
            "DO UPDATE SET arrow_schema_json = excluded.arrow_schema_json",
            (connection_id, schema_name, table_name, arrow_schema_json),
        )
        return self._fetch_id(
            f"SELECT id FROM tables WHERE connection_id = {p1} AND schema_name = {p2} "
            f"AND table_name = {p3}",
            (connection_id, schema_name, table_name),
        )

    def list_tables(self, connection_id: int | None = None) -> list[TableInfo]:
        sql = f"SELECT {_TABLE_COLUMNS} FROM tables"
        params: tuple = ()
        if connection_id is not None:
            sql += f" WHERE connection_id = {self._placeholder(1)}"
            params = (connection_id,)
        sql += " ORDER BY schema_name, table_name"
        return [TableInfo(*row) for row in self._fetch_all(sql, params)]

    def get_table(self, connection_id: int, schema_name: str, table_name: str) -> TableInfo | None:
        p1, p2, p3 = self._params(3)
        row = self._fetch_optional(
            f"SELECT {_TABLE_COLUMNS} FROM tables WHERE connection_id = {p1} "
            f"AND schema_name = {p2} AND table_name = {p3}",
            (connection_id, schema_name, table_name),
        )
        return None if row is None else TableInfo(*row)

    def update_table_sync(self, table_id: int, parquet_path: str, state_path: str) -> None:
        p1, p2, p3 = self._params(3)
        self._execute(
            f"UPDATE tables SET parquet_path = {p1}, state_path = {p2}, "
            f"last_sync = CURRENT_TIMESTAMP WHERE id = {p3}",
            (parquet_path, state_path, table_id),
        )

    def clear_table_cache_metadata(
        self, connection_id: int, schema_name: str, table_name: str
    ) -> TableInfo:
        table = self.get_table(connection_id, schema_name, table_name)
        if table is None:
            raise NotFoundError(f"Table '{schema_name}.{table_name}' not found")
        self._execute(
            "UPDATE tables SET parquet_path = NULL, state_path = NULL, last_sync = NULL "
            f"WHERE id = {self._placeholder(1)}",
            (table.id,),
        )
        return table

    def _require_connection(self, name: str) -> ConnectionInfo:
        connection = self.get_connection(name)
        if connection is None:
            raise NotFoundError(f"Connection '{name}' not found")
        return connection

    def clear_connection_cache_metadata(self, name: str) -> None:
        connection = self._require_connection(name)
        self._execute(
            "UPDATE tables SET parquet_path = NULL, state_path = NULL, last_sync = NULL "
            f"WHERE connection_id = {self._placeholder(1)}",
            (connection.id,),
        )

    def delete_connection(self, name: str) -> None:
        connection = self._require_connection(name)
        self._execute(
            f"DELETE FROM tables WHERE connection_id = {self._placeholder(1)}", (connection.id,)
        )
        self._execute(f"DELETE FROM connections WHERE id = {self._placeholder(1)}", (connection.id,))