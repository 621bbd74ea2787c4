"""PostgreSQL type mapping and connection-string helpers."""

from __future__ import annotations

from rivetdb.types import (
    BINARY,
    BOOLEAN,
    DATE32,
    FLOAT32,
    FLOAT64,
    INT16,
    INT32,
    INT64,
    UTF8,
    DataType,
    TimeUnit,
)

_SSL_RETRY_MARKERS = ("connection is insecure", "sslmode=require")

_TYPE_MAP: dict[str, DataType] = {}


def _register(dtype: DataType, *names: str) -> None:
    for name in names:
        _TYPE_MAP[name] = dtype


_register(BOOLEAN, "bool", "boolean")
_register(INT16, "int2", "smallint")
_register(INT32, "int4", "int", "integer")
_register(INT64, "int8", "bigint")
_register(FLOAT32, "float4", "real")
_register(FLOAT64, "float8", "double precision")
_register(BINARY, "bytea")
_register(DATE32, "date")
_register(DataType.timestamp(TimeUnit.MICROSECOND, None), "timestamp", "timestamp without time zone")
_register(DataType.timestamp(TimeUnit.MICROSECOND, "UTC"), "timestamptz", "timestamp with time zone")
# numeric, decimal, time and interval deliberately map to Utf8, as do all
# character, uuid and json types; anything unlisted falls back to Utf8 too.


def pg_type_to_arrow(pg_type: str) -> DataType:
    """Convert a PostgreSQL type name to an Arrow data type; unknown types become Utf8."""
    return _TYPE_MAP.get(pg_type.lower(), UTF8)


def with_sslmode_require(connection_string: str) -> str:
    """Return the connection string with ``sslmode=require`` appended."""
    separator = "&" if "?" in connection_string else "?"
    return f"{connection_string}{separator}sslmode=require"


def needs_ssl_retry(error_message: str) -> bool:
    """Tell whether a connection error indicates the server requires SSL."""
    return any(marker in error_message for marker in _SSL_RETRY_MARKERS)