"""
In-memory data model for parsed AXON documents.

All entities are built once during a single pass over the input and are
not modified afterwards. Sequences are stored as tuples so a returned
``ParseResult`` cannot be appended to by accident.

Value representation:
    Null      -> ``None``
    String    -> ``str``
    Integer   -> ``int`` (range-checked to signed 64-bit)
    Float     -> ``float``
    Boolean   -> ``bool``
    Timestamp -> ``str`` (unparsed)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

Value = Union[None, str, int, float, bool]
Record = dict[str, Value]


class ScalarType(str, Enum):
    """Scalar column types. The value is the one-character type code."""

    STRING = "S"
    INTEGER = "I"
    FLOAT = "F"
    BOOLEAN = "B"
    TIMESTAMP = "T"

    @property
    def code(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldDefinition:
    """One column of a schema: name, scalar type and nullability."""
    name: str
    type: ScalarType
    nullable: bool = False


@dataclass(frozen=True)
class Schema:
    """A named, ordered list of field definitions.

    Field order defines the column-to-field mapping for data rows.
    Names are not required to be unique.
    """
    name: str
    fields: tuple[FieldDefinition, ...] = ()

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def field_index(self, name: str) -> int:
        """Return the position of the first field called *name*, or -1."""
        for i, f in enumerate(self.fields):
            if f.name == name:
                return i
        return -1


def find_schema(schemas: Iterable[Schema], name: str) -> Schema | None:
    """Return the first schema called *name*, or ``None``."""
    return next((s for s in schemas if s.name == name), None)


@dataclass(frozen=True)
class DataBlock:
    """Rows of one ``@data`` block.

    Attributes:
        schema_name: Name of the schema the block was resolved against.
        declared_count: The ``[n]`` from the header. Advisory only; never
            checked against the number of rows.
        rows: One record per non-blank body line, in input order.
    """
    schema_name: str
    declared_count: int
    rows: tuple[Record, ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class ParseResult:
    """Everything parsed from one AXON document."""
    schemas: tuple[Schema, ...] = field(default_factory=tuple)
    data_blocks: tuple[DataBlock, ...] = field(default_factory=tuple)

    def get_schema(self, name: str) -> Schema | None:
        return find_schema(self.schemas, name)
