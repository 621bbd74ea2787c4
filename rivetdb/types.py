"""Arrow-style data types, schemas and table metadata."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from rivetdb.errors import SchemaSerializationError


class TimeUnit(Enum):
    SECOND = "Second"
    MILLISECOND = "Millisecond"
    MICROSECOND = "Microsecond"
    NANOSECOND = "Nanosecond"


class IntervalUnit(Enum):
    YEAR_MONTH = "YearMonth"
    DAY_TIME = "DayTime"
    MONTH_DAY_NANO = "MonthDayNano"


_PLAIN_TYPES = frozenset(
    {
        "Null", "Boolean",
        "Int8", "Int16", "Int32", "Int64",
        "UInt8", "UInt16", "UInt32", "UInt64",
        "Float16", "Float32", "Float64",
        "Utf8", "LargeUtf8", "Utf8View",
        "Binary", "LargeBinary", "BinaryView",
        "Date32", "Date64",
    }
)
_UNIT_TYPES: dict[str, type[Enum]] = {
    "Time32": TimeUnit,
    "Time64": TimeUnit,
    "Duration": TimeUnit,
    "Interval": IntervalUnit,
}
_DECIMAL_TYPES = frozenset({"Decimal32", "Decimal64", "Decimal128", "Decimal256"})


@dataclass(frozen=True)
class DataType:
    """A column data type: a type name and its parameters."""

    name: str
    params: tuple = ()

    def __post_init__(self) -> None:
        name, params = self.name, self.params
        if name in _PLAIN_TYPES:
            ok = params == ()
        elif name == "Timestamp":
            ok = (
                len(params) == 2
                and isinstance(params[0], TimeUnit)
                and (params[1] is None or isinstance(params[1], str))
            )
        elif name in _UNIT_TYPES:
            ok = len(params) == 1 and isinstance(params[0], _UNIT_TYPES[name])
        elif name in _DECIMAL_TYPES:
            ok = len(params) == 2 and all(isinstance(p, int) for p in params)
        elif name == "FixedSizeBinary":
            ok = len(params) == 1 and isinstance(params[0], int)
        else:
            raise ValueError(f"unsupported data type: {name}")
        if not ok:
            raise ValueError(f"invalid parameters for {name}: {params!r}")

    @classmethod
    def timestamp(cls, unit: TimeUnit = TimeUnit.MICROSECOND, tz: str | None = None) -> DataType:
        return cls("Timestamp", (unit, tz))

    @classmethod
    def time64(cls, unit: TimeUnit = TimeUnit.MICROSECOND) -> DataType:
        return cls("Time64", (unit,))

    @classmethod
    def interval(cls, unit: IntervalUnit) -> DataType:
        return cls("Interval", (unit,))

    @classmethod
    def decimal128(cls, precision: int, scale: int) -> DataType:
        return cls("Decimal128", (precision, scale))

    def to_json_value(self) -> Any:
        """Return the JSON representation used by Arrow schema serialization."""
        if self.name in _PLAIN_TYPES:
            return self.name
        if self.name == "Timestamp":
            unit, tz = self.params
            return {"Timestamp": [unit.value, tz]}
        if self.name in _UNIT_TYPES:
            return {self.name: self.params[0].value}
        if self.name in _DECIMAL_TYPES:
            return {self.name: list(self.params)}
        return {self.name: self.params[0]}

    @classmethod
    def from_json_value(cls, value: Any) -> DataType:
        """Build a data type from its Arrow JSON representation."""
        if isinstance(value, str):
            if value not in _PLAIN_TYPES:
                raise ValueError(f"unsupported data type: {value}")
            return cls(value)
        if not isinstance(value, dict) or len(value) != 1:
            raise ValueError(f"invalid data type: {value!r}")
        ((name, arg),) = value.items()
        if name == "Timestamp":
            unit, tz = arg
            return cls.timestamp(TimeUnit(unit), tz)
        if name in _UNIT_TYPES:
            return cls(name, (_UNIT_TYPES[name](arg),))
        if name in _DECIMAL_TYPES:
            precision, scale = arg
            return cls(name, (precision, scale))
        if name == "FixedSizeBinary":
            return cls(name, (arg,))
        raise ValueError(f"unsupported data type: {name}")

    def __str__(self) -> str:
        if not self.params:
            return self.name
        args = ", ".join(p.value if isinstance(p, Enum) else repr(p) for p in self.params)
        return f"{self.name}({args})"


BOOLEAN = DataType("Boolean")
INT8 = DataType("Int8")
INT16 = DataType("Int16")
INT32 = DataType("Int32")
INT64 = DataType("Int64")
UINT8 = DataType("UInt8")
UINT16 = DataType("UInt16")
UINT32 = DataType("UInt32")
UINT64 = DataType("UInt64")
FLOAT32 = DataType("Float32")
FLOAT64 = DataType("Float64")
UTF8 = DataType("Utf8")
BINARY = DataType("Binary")
DATE32 = DataType("Date32")


@dataclass
class Field:
    """A named, typed column of a schema."""

    name: str
    data_type: DataType
    nullable: bool = True
    metadata: dict[str, str] = field(default_factory=dict)

    def to_json_value(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "data_type": self.data_type.to_json_value(),
            "nullable": self.nullable,
            "dict_id": 0,
            "dict_is_ordered": False,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_json_value(cls, value: dict[str, Any]) -> Field:
        return cls(
            name=value["name"],
            data_type=DataType.from_json_value(value["data_type"]),
            nullable=bool(value["nullable"]),
            metadata=dict(value.get("metadata") or {}),
        )


@dataclass
class Schema:
    """An ordered collection of fields."""

    fields: list[Field] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)

    def to_json(self) -> str:
        """Serialize the schema to Arrow's JSON form."""
        return json.dumps(
            {
                "fields": [f.to_json_value() for f in self.fields],
                "metadata": dict(self.metadata),
            }
        )


def deserialize_arrow_schema(json_text: str) -> Schema:
    """Deserialize an Arrow schema from its JSON form."""
    try:
        value = json.loads(json_text)
        return Schema(
            fields=[Field.from_json_value(f) for f in value["fields"]],
            metadata=dict(value.get("metadata") or {}),
        )
    except (ValueError, TypeError, KeyError, AttributeError) as exc:
        raise SchemaSerializationError(str(exc)) from exc


@dataclass
class ColumnMetadata:
    """Metadata for a discovered table column."""

    name: str
    data_type: DataType
    nullable: bool
    ordinal_position: int


@dataclass
class TableMetadata:
    """Metadata for a discovered table."""

    catalog_name: str | None
    schema_name: str
    table_name: str
    table_type: str
    columns: list[ColumnMetadata] = field(default_factory=list)

    def to_arrow_schema(self) -> Schema:
        """Build a schema from the column metadata."""
        return Schema([Field(c.name, c.data_type, c.nullable) for c in self.columns])