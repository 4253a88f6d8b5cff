"""
DataFrame conversion for parsed AXON data blocks.

Each data block becomes one table. Columns follow the schema's field
order and use pandas nullable extension dtypes so that Null survives
the round trip to Parquet without turning integers into floats:

  String    -> "string"
  Integer   -> "Int64"
  Float     -> "Float64"
  Boolean   -> "boolean"
  Timestamp -> "string"   (kept unparsed, as in the parse result)

Fields missing from a short row are ``<NA>`` in the frame.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import pandas as pd

from axon_parser.model import DataBlock, FieldDefinition, ParseResult, ScalarType, Schema

logger = logging.getLogger(__name__)

PANDAS_DTYPES: dict[ScalarType, str] = {
    ScalarType.STRING: "string",
    ScalarType.INTEGER: "Int64",
    ScalarType.FLOAT: "Float64",
    ScalarType.BOOLEAN: "boolean",
    ScalarType.TIMESTAMP: "string",
}

# Names used by the exporter for the description tables
RESERVED_TABLE_NAMES = frozenset({"_meta", "_schemas"})


def block_to_dataframe(block: DataBlock, schema: Schema) -> pd.DataFrame:
    """Convert one data block to a typed DataFrame.

    Repeated field names collapse into one column; the last declaration
    decides its dtype, matching which value the record keeps.
    """
    columns: dict[str, FieldDefinition] = {}
    for f in schema.fields:
        columns[f.name] = f

    data = {
        name: pd.array(
            [row.get(name) for row in block.rows],
            dtype=PANDAS_DTYPES[f.type],
        )
        for name, f in columns.items()
    }
    return pd.DataFrame(data, columns=list(columns))


def table_names(blocks: Iterable[DataBlock]) -> list[str]:
    """Assign a unique table name to each block, in order.

    The first block of a schema uses the schema name; later ones get
    ``_2``, ``_3``, ... suffixes. Empty names become ``unnamed``.
    """
    used: set[str] = set(RESERVED_TABLE_NAMES)
    names: list[str] = []
    for block in blocks:
        base = block.schema_name or "unnamed"
        name = base
        n = 2
        while name in used:
            name = f"{base}_{n}"
            n += 1
        used.add(name)
        names.append(name)
    return names


def select_blocks(
    result: ParseResult, schemas: Iterable[str] | None = None
) -> list[DataBlock]:
    """Return the data blocks whose schema is in *schemas* (all if ``None``/empty)."""
    wanted = set(schemas or ())
    if not wanted:
        return list(result.data_blocks)
    return [b for b in result.data_blocks if b.schema_name in wanted]


def to_frames(
    result: ParseResult, schemas: Iterable[str] | None = None
) -> dict[str, pd.DataFrame]:
    """Convert the data blocks of a parse result to DataFrames.

    Args:
        result: A parse result.
        schemas: Optional schema names to restrict the export to.

    Returns:
        Dict mapping table name -> DataFrame, in document order.
    """
    blocks = select_blocks(result, schemas)
    frames: dict[str, pd.DataFrame] = {}
    for name, block in zip(table_names(blocks), blocks):
        schema = result.get_schema(block.schema_name)
        if schema is None:
            # Blocks produced by the parser always resolve; guard hand-built results
            raise ValueError(f"No schema '{block.schema_name}' for data block '{name}'")
        frames[name] = block_to_dataframe(block, schema)
        logger.debug("Table '%s': %d rows x %d cols", name, *frames[name].shape)
    return frames
