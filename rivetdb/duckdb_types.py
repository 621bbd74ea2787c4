"""Mapping of DuckDB type names to Arrow data types."""

from __future__ import annotations

from rivetdb.types import (
    BINARY,
    BOOLEAN,
    DATE32,
    FLOAT32,
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    UTF8,
    DataType,
    IntervalUnit,
    TimeUnit,
)

_TYPE_MAP: dict[str, DataType] = {}


def _register(dtype: DataType, *names: str) -> None:
    for name in names:
        _TYPE_MAP[name] = dtype


_register(BOOLEAN, "BOOLEAN", "BOOL")
_register(INT8, "TINYINT", "INT1")
_register(INT16, "SMALLINT", "INT2")
_register(INT32, "INTEGER", "INT", "INT4")
_register(INT64, "BIGINT", "INT8")
_register(UINT8, "UTINYINT")
_register(UINT16, "USMALLINT")
_register(UINT32, "UINTEGER")
_register(UINT64, "UBIGINT")
_register(FLOAT32, "REAL", "FLOAT4", "FLOAT")
_register(FLOAT64, "DOUBLE", "FLOAT8")
_register(DataType.decimal128(38, 10), "DECIMAL", "NUMERIC")
_register(UTF8, "VARCHAR", "TEXT", "STRING", "CHAR", "BPCHAR", "UUID", "JSON")
_register(BINARY, "BLOB", "BYTEA", "BINARY", "VARBINARY")
_register(DATE32, "DATE")
_register(DataType.time64(TimeUnit.MICROSECOND), "TIME")
_register(DataType.timestamp(TimeUnit.MICROSECOND, None), "TIMESTAMP", "DATETIME")
_register(
    DataType.timestamp(TimeUnit.MICROSECOND, "UTC"),
    "TIMESTAMPTZ",
    "TIMESTAMP WITH TIME ZONE",
)
_register(DataType.interval(IntervalUnit.MONTH_DAY_NANO), "INTERVAL")


def duckdb_type_to_arrow(duckdb_type: str) -> DataType:
    """Convert a DuckDB type name to an Arrow data type; unknown types become Utf8."""
    base_type = duckdb_type.upper().split("(", 1)[0].strip()
    return _TYPE_MAP.get(base_type, UTF8)