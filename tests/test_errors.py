import pytest

from rivetdb.errors import (
    DataFetchError,
    DiscoveryError,
    DriverLoadError,
    FetchConnectionError,
    QueryError,
    SchemaSerializationError,
    StorageError,
    UnsupportedDriverError,
    storage_error_from_os_error,
)


@pytest.mark.parametrize(
    ("cls", "prefix"),
    [
        (DriverLoadError, "driver load failed"),
        (FetchConnectionError, "connection failed"),
        (QueryError, "query failed"),
        (StorageError, "storage write failed"),
        (UnsupportedDriverError, "unsupported driver"),
        (DiscoveryError, "discovery failed"),
        (SchemaSerializationError, "schema serialization failed"),
    ],
)
def test_message_has_prefix_and_detail(cls, prefix):
    err = cls("boom")
    assert str(err) == f"{prefix}: boom"
    assert err.detail == "boom"


@pytest.mark.parametrize(
    "cls",
    [
        DriverLoadError,
        FetchConnectionError,
        QueryError,
        StorageError,
        UnsupportedDriverError,
        DiscoveryError,
        SchemaSerializationError,
    ],
)
def test_all_errors_share_base_class(cls):
    err = cls("Snowflake")
    assert isinstance(err, DataFetchError)
    assert err.detail == "Snowflake"
    assert str(err).endswith(": Snowflake")


def test_unsupported_driver_caught_as_base_class():
    err = UnsupportedDriverError("Snowflake")
    assert isinstance(err, DataFetchError)
    assert str(err) == "unsupported driver: Snowflake"
    assert err.detail == "Snowflake"


def test_storage_error_from_os_error():
    err = storage_error_from_os_error(OSError("disk full"))
    assert isinstance(err, StorageError)
    assert str(err) == "storage write failed: disk full"


def test_storage_error_from_file_not_found(tmp_path):
    missing = tmp_path / "nope.txt"
    try:
        missing.read_bytes()
    except OSError as exc:
        err = storage_error_from_os_error(exc)
    assert str(err).startswith("storage write failed: ")
    assert "nope.txt" in err.detail