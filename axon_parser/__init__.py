"""
axon-parser: Python library for parsing AXON schema + data documents.

Public API surface:

- ``parse(text, ...)`` -- parse an AXON document held in memory and
  return a ``ParseResult`` (schemas + data blocks of typed records).

- ``parse_file(path, ...)`` -- same, reading the document from disk.

- ``to_frames(result, ...)`` -- convert data blocks to pandas DataFrames
  with nullable column dtypes.

- ``export(...)`` -- first-run workflow. Builds a default
  ``axonconfig.yaml`` (optionally saving it), parses the input, and
  writes every data block plus ``_meta``/``_schemas`` to CSV or Parquet.

- ``export_from_config(...)`` -- subsequent-run workflow. Loads and
  validates ``axonconfig.yaml``, then re-parses and re-exports.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from axon_parser._pipeline import parse_source, run_pipeline_and_export
from axon_parser.config import (
    AxonConfig,
    ParseOptions,
    generate_default_config,
    load_config,
    save_config,
)
from axon_parser.document import DocumentParser, parse
from axon_parser.exceptions import (
    AxonError,
    AxonParseError,
    MalformedDataHeaderError,
    UnknownSchemaError,
    UnknownTypeCodeError,
    UnterminatedBlockError,
    ValueCoercionError,
)
from axon_parser.frames import to_frames
from axon_parser.model import (
    DataBlock,
    FieldDefinition,
    ParseResult,
    Record,
    ScalarType,
    Schema,
    Value,
)

__all__ = [
    "parse",
    "parse_file",
    "to_frames",
    "export",
    "export_from_config",
    "DocumentParser",
    "ParseOptions",
    "AxonConfig",
    "ParseResult",
    "Schema",
    "FieldDefinition",
    "DataBlock",
    "ScalarType",
    "Record",
    "Value",
    "AxonError",
    "AxonParseError",
    "MalformedDataHeaderError",
    "UnknownSchemaError",
    "UnknownTypeCodeError",
    "ValueCoercionError",
    "UnterminatedBlockError",
]

logger = logging.getLogger(__name__)


def parse_file(
    path: str | Path,
    options: ParseOptions | None = None,
    encoding: str = "utf-8",
) -> ParseResult:
    """Parse an AXON document from a file.

    Raises:
        FileNotFoundError: If *path* does not exist.
        AxonParseError: On any fatal parse condition.
    """
    text = Path(path).read_text(encoding=encoding)
    logger.info("parse_file() -- %s", path)
    return parse(text, options)


def export(
    input_path: str,
    output_dir: str = "outputs/",
    output_format: Literal["csv", "parquet"] = "parquet",
    config_path: str | None = None,
) -> list[str]:
    """First-run entry point: parse an AXON file and export its tables.

    Orchestration:
      1. ``generate_default_config()`` -> ``AxonConfig`` (all blocks).
      2. ``save_config()`` to *config_path*, if given.
      3. Parse the input file.
      4. ``run_pipeline_and_export()`` -- frames, description tables, export.

    Args:
        input_path: Path to the AXON document.
        output_dir: Directory where output tables will be written.
        output_format: ``"parquet"`` (default) or ``"csv"``.
        config_path: Where to write the generated config. ``None`` skips
            saving it.

    Returns:
        List of output file paths that were written.

    Raises:
        AxonParseError: If the document fails to parse.
        ExportError: If writing the outputs fails.
    """
    logger.info("export() -- input_path=%s, output_dir=%s", input_path, output_dir)

    config = generate_default_config(
        input_path=input_path,
        output_dir=output_dir,
        output_format=output_format,
    )
    if config_path is not None:
        save_config(config, config_path)

    result = parse_source(config)
    return run_pipeline_and_export(config, result)


def export_from_config(config_path: str = "axonconfig.yaml") -> list[str]:
    """Subsequent-run entry point: load config, re-parse, re-export.

    Raises:
        FileNotFoundError: If *config_path* does not exist.
        pydantic.ValidationError: If the config fails validation.
        ConfigValidationError: If ``tables`` names undeclared schemas.
        AxonParseError: If the document fails to parse.
    """
    logger.info("export_from_config() -- config_path=%s", config_path)

    config = load_config(config_path)
    result = parse_source(config)
    return run_pipeline_and_export(config, result)
