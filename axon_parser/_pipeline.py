"""
Internal pipeline orchestration for axon-parser.

Shared by ``export()`` and ``export_from_config()`` so the
parse -> frames -> meta -> export sequence lives in one place.

This module is **not** part of the public API.
"""

from __future__ import annotations

import logging
from pathlib import Path

from axon_parser.config import AxonConfig, validate_tables_against_result
from axon_parser.document import DocumentParser
from axon_parser.export import export_tables
from axon_parser.frames import select_blocks, to_frames
from axon_parser.meta import build_meta_table, build_schema_table
from axon_parser.model import ParseResult

logger = logging.getLogger(__name__)


def parse_source(config: AxonConfig) -> ParseResult:
    """Read and parse the source file named in *config*."""
    path = Path(config.source.input_path)
    text = path.read_text(encoding=config.source.encoding)
    logger.info("Parsing %s (%d chars)", path, len(text))
    return DocumentParser(config.parsing).parse(text)


def run_pipeline_and_export(
    config: AxonConfig,
    parse_result: ParseResult,
) -> list[str]:
    """Convert the parse result to tables, build description tables, export.

    Steps:
      1. Validate ``config.tables`` against the parsed schemas.
      2. Convert the selected data blocks to DataFrames.
      3. Build ``_meta`` (and ``_schemas`` if enabled).
      4. Export all tables to disk.

    Returns:
        List of output file paths that were written.
    """
    # 1. Cross-check selection
    validate_tables_against_result(config, {s.name for s in parse_result.schemas})

    # 2. Frames
    tables = to_frames(parse_result, config.tables)
    blocks = select_blocks(parse_result, config.tables)

    # 3. Description tables
    meta_df = build_meta_table(
        parse_result,
        table_names=list(tables),
        blocks=blocks,
        source_path=config.source.input_path,
    )
    schemas_df = build_schema_table(parse_result) if config.output.write_schemas else None

    # 4. Export
    written = export_tables(
        tables=tables,
        meta_df=meta_df,
        output_dir=config.output.output_dir,
        output_format=config.output.output_format,
        schemas_df=schemas_df,
    )

    logger.info("Pipeline complete: wrote %d files", len(written))
    return written
