"""
Description tables for exported AXON documents.

Two flat tables are written alongside the data tables:

``_meta`` -- one row per exported data block (lineage + counts):
  table_name, schema_name, declared_count, row_count, field_count,
  source_file, source_hash, processed_at

``_schemas`` -- one row per (schema, field):
  schema_name, position, field_name, type, type_code, nullable

``declared_count`` and ``row_count`` are reported side by side; the
parser itself never compares them.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from axon_parser.model import DataBlock, ParseResult

logger = logging.getLogger(__name__)

META_COLUMNS = [
    "table_name", "schema_name", "declared_count", "row_count", "field_count",
    "source_file", "source_hash", "processed_at",
]

SCHEMA_COLUMNS = [
    "schema_name", "position", "field_name", "type", "type_code", "nullable",
]


def _source_lineage(source_path: str | Path | None) -> tuple[str | None, str]:
    """Return ``(file name, sha256 hex)`` of the parsed document.

    AXON documents are read whole, so the digest is taken the same way.
    A vanished file keeps its name with an empty digest.
    """
    if source_path is None:
        return None, ""
    path = Path(source_path)
    try:
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
    except FileNotFoundError:
        logger.warning("Source file not found for hashing: %s", path)
        digest = ""
    return path.name, digest


def build_meta_table(
    result: ParseResult,
    table_names: Sequence[str],
    blocks: Sequence[DataBlock],
    source_path: str | Path | None = None,
) -> pd.DataFrame:
    """Build the ``_meta`` table.

    Args:
        result: The parse result the blocks came from (for field counts).
        table_names: Output table name of each block, parallel to *blocks*.
        blocks: The exported data blocks.
        source_path: The AXON file that was parsed, if any.

    Returns:
        DataFrame with one row per block and ``META_COLUMNS`` columns.
    """
    source_file, source_hash = _source_lineage(source_path)
    processed_at = datetime.now(timezone.utc).isoformat(timespec="seconds")

    rows: list[dict] = []
    for name, block in zip(table_names, blocks):
        schema = result.get_schema(block.schema_name)
        rows.append(
            {
                "table_name": name,
                "schema_name": block.schema_name,
                "declared_count": block.declared_count,
                "row_count": block.row_count,
                "field_count": len(schema.fields) if schema is not None else 0,
                "source_file": source_file,
                "source_hash": source_hash,
                "processed_at": processed_at,
            }
        )

    logger.info("Built _meta table: %d rows", len(rows))
    # Explicit columns keep the schema stable when rows is empty
    return pd.DataFrame(rows, columns=META_COLUMNS)


def build_schema_table(result: ParseResult) -> pd.DataFrame:
    """Build the ``_schemas`` table: one row per declared field."""
    rows: list[dict] = []
    for schema in result.schemas:
        for position, f in enumerate(schema.fields):
            rows.append(
                {
                    "schema_name": schema.name,
                    "position": position,
                    "field_name": f.name,
                    "type": f.type.name.lower(),
                    "type_code": f.type.code,
                    "nullable": f.nullable,
                }
            )
    return pd.DataFrame(rows, columns=SCHEMA_COLUMNS)
