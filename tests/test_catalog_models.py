import json

import pytest

from rivetdb.catalog_models import (
    CatalogError,
    CatalogManager,
    ConnectionInfo,
    NotFoundError,
    TableInfo,
)


def test_connection_info_to_dict_holds_fields():
    info = ConnectionInfo(7, "warehouse", "postgres", '{"host": "localhost"}')
    assert info.to_dict() == {
        "id": 7,
        "name": "warehouse",
        "source_type": "postgres",
        "config_json": '{"host": "localhost"}',
    }


def test_connection_info_round_trip_through_json():
    info = ConnectionInfo(1, "db", "duckdb", "{}")
    restored = ConnectionInfo(**json.loads(json.dumps(info.to_dict())))
    assert restored == info


def test_table_info_defaults_are_empty_cache_state():
    table = TableInfo(3, 1, "public", "users")
    data = table.to_dict()
    assert data["parquet_path"] is None
    assert data["state_path"] is None
    assert data["last_sync"] is None
    assert data["arrow_schema_json"] is None


def test_table_info_round_trip():
    table = TableInfo(3, 1, "public", "users", "/c/p", "/s/p", "2024-01-01 00:00:00", "{}")
    assert TableInfo(**table.to_dict()) == table


def test_catalog_manager_is_abstract():
    with pytest.raises(TypeError):
        CatalogManager()


def test_not_found_caught_as_catalog_error():
    err = NotFoundError("Connection 'missing' not found")
    assert isinstance(err, CatalogError)
    assert "Connection 'missing' not found" in str(err)