"""Errors raised while discovering and fetching data from remote sources."""

from __future__ import annotations


class DataFetchError(Exception):
    """Base class for every data fetching failure."""

    prefix: str = "data fetch failed"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class DriverLoadError(DataFetchError):
    """A driver library could not be loaded."""

    prefix = "driver load failed"


class FetchConnectionError(DataFetchError):
    """A connection to the remote database could not be established."""

    prefix = "connection failed"


class QueryError(DataFetchError):
    """Executing a query failed."""

    prefix = "query failed"


class StorageError(DataFetchError):
    """Writing data to storage failed."""

    prefix = "storage write failed"


class UnsupportedDriverError(DataFetchError):
    """The requested driver is not supported or not available."""

    prefix = "unsupported driver"


class DiscoveryError(DataFetchError):
    """Discovering tables or metadata failed."""

    prefix = "discovery failed"


class SchemaSerializationError(DataFetchError):
    """An Arrow schema could not be serialized or deserialized."""

    prefix = "schema serialization failed"


def storage_error_from_os_error(exc: OSError) -> StorageError:
    """Wrap an operating-system error as a storage error."""
    return StorageError(str(exc))