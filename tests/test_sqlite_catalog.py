import sqlite3

import pytest

from rivetdb.catalog_models import CatalogError, NotFoundError
from rivetdb.sqlite_catalog import SqliteCatalogManager, SqliteMigrations


@pytest.fixture
def catalog(tmp_path):
    manager = SqliteCatalogManager(str(tmp_path / "catalog.db"))
    manager.run_migrations()
    yield manager
    manager.close()


def test_migrations_set_version_and_are_idempotent(tmp_path):
    path = str(tmp_path / "catalog.db")
    with SqliteCatalogManager(path) as manager:
        manager.run_migrations()
        manager.run_migrations()
    connection = sqlite3.connect(path)
    try:
        assert SqliteMigrations(connection).current_version() == 1
        rows = connection.execute("SELECT version FROM schema_migrations").fetchall()
        assert rows == [(1,)]
    finally:
        connection.close()


def test_fresh_migrations_version_is_zero():
    connection = sqlite3.connect(":memory:")
    try:
        migrations = SqliteMigrations(connection)
        migrations.ensure_migrations_table()
        assert migrations.current_version() == 0
    finally:
        connection.close()


def test_connection_round_trip(catalog):
    conn_id = catalog.add_connection("warehouse", "postgres", '{"port": 5432}')
    info = catalog.get_connection("warehouse")
    assert info.id == conn_id
    assert info.config_json == '{"port": 5432}'
    assert [c.name for c in catalog.list_connections()] == ["warehouse"]


def test_data_persists_across_reopen(tmp_path):
    path = str(tmp_path / "catalog.db")
    with SqliteCatalogManager(path) as manager:
        manager.run_migrations()
        conn_id = manager.add_connection("src", "duckdb", "{}")
        manager.add_table(conn_id, "main", "events", "{}")
    with SqliteCatalogManager(path) as reopened:
        assert reopened.get_connection("src").id == conn_id
        assert [t.table_name for t in reopened.list_tables(conn_id)] == ["events"]


def test_duplicate_connection_raises_catalog_error(catalog):
    catalog.add_connection("src", "duckdb", "{}")
    with pytest.raises(CatalogError):
        catalog.add_connection("src", "duckdb", "{}")


def test_table_for_unknown_connection_rejected(catalog):
    with pytest.raises(CatalogError):
        catalog.add_table(999, "public", "users", "{}")


def test_table_sync_lifecycle(catalog):
    conn_id = catalog.add_connection("src", "duckdb", "{}")
    table_id = catalog.add_table(conn_id, "public", "users", "{}")
    catalog.update_table_sync(table_id, "/cache/1/public/users", "/state/1/public/users.json")
    table = catalog.get_table(conn_id, "public", "users")
    assert table.parquet_path == "/cache/1/public/users"
    assert table.last_sync is not None

    catalog.clear_connection_cache_metadata("src")
    cleared = catalog.get_table(conn_id, "public", "users")
    assert (cleared.parquet_path, cleared.state_path, cleared.last_sync) == (None, None, None)


def test_clear_table_returns_previous_state(catalog):
    conn_id = catalog.add_connection("src", "duckdb", "{}")
    table_id = catalog.add_table(conn_id, "public", "users", "{}")
    catalog.update_table_sync(table_id, "/p", "/s")
    previous = catalog.clear_table_cache_metadata(conn_id, "public", "users")
    assert previous.parquet_path == "/p"
    assert catalog.get_table(conn_id, "public", "users").parquet_path is None


def test_not_found_errors(catalog):
    with pytest.raises(NotFoundError, match="ghost"):
        catalog.delete_connection("ghost")
    conn_id = catalog.add_connection("src", "duckdb", "{}")
    with pytest.raises(NotFoundError, match="public.ghost"):
        catalog.clear_table_cache_metadata(conn_id, "public", "ghost")


def test_delete_connection_removes_everything(catalog):
    conn_id = catalog.add_connection("src", "duckdb", "{}")
    catalog.add_table(conn_id, "public", "users", "{}")
    catalog.delete_connection("src")
    assert catalog.list_connections() == []
    assert catalog.list_tables() == []


def test_close_is_idempotent_and_blocks_use(tmp_path):
    manager = SqliteCatalogManager(str(tmp_path / "catalog.db"))
    manager.run_migrations()
    manager.close()
    manager.close()
    with pytest.raises(CatalogError, match="closed"):
        manager.list_connections()


def test_repr_shows_catalog_path(tmp_path):
    path = str(tmp_path / "catalog.db")
    with SqliteCatalogManager(path) as manager:
        assert path in repr(manager)