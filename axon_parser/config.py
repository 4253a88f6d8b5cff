"""
Configuration models and YAML I/O for axon-parser.

This module defines the Pydantic models that map 1:1 to axonconfig.yaml,
plus helper functions for loading, saving, and auto-generating the config.

Key models:
- AxonConfig: Top-level config (source + parsing + output + tables).
- SourceConfig: Input file path and text encoding.
- ParseOptions: Parser leniency switches (e.g. ``require_end``).
- OutputConfig: Output directory, format, and which description tables
  to write.

Key functions:
- load_config(path) -> AxonConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- generate_default_config(...) -> AxonConfig: Build config for a first run.
- validate_tables_against_result(config, available_schemas): Cross-check
  config vs the parsed document.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, model_validator

from axon_parser.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class SourceConfig(BaseModel):
    """Source file information."""

    input_path: str = Field(..., description="Path to the AXON document")
    encoding: str = Field("utf-8", description="Text encoding of the input file")


class ParseOptions(BaseModel):
    """Parser behaviour switches.

    The defaults are lenient: an unterminated block simply ends at EOF.
    """

    require_end: bool = Field(
        False,
        description=(
            "If True, a @schema/@data block that reaches end of input "
            "without @end is a fatal error instead of a logged warning"
        ),
    )


class OutputConfig(BaseModel):
    """Output settings."""

    output_dir: str = Field("outputs/", description="Directory for output files")
    output_format: Literal["csv", "parquet"] = Field(
        "parquet", description="Output format"
    )
    write_schemas: bool = Field(
        True, description="If True, also write the _schemas field table"
    )


class AxonConfig(BaseModel):
    """Top-level configuration for axon-parser.

    Maps 1:1 to axonconfig.yaml.
    """

    source: SourceConfig
    parsing: ParseOptions = Field(default_factory=ParseOptions)
    output: OutputConfig = Field(default_factory=OutputConfig)
    tables: list[str] = Field(
        default_factory=list,
        description=(
            "Schema names whose data blocks are exported. "
            "Empty means every data block is exported."
        ),
    )

    @model_validator(mode="after")
    def _check_tables_unique(self) -> AxonConfig:
        """Validate that no schema name is listed twice."""
        seen: set[str] = set()
        for name in self.tables:
            if name in seen:
                raise ValueError(f"Schema '{name}' is listed more than once in tables.")
            seen.add(name)
        return self


def load_config(path: str | Path) -> AxonConfig:
    """Load and validate axonconfig.yaml into an AxonConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the config file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return AxonConfig.model_validate(raw)


def save_config(config: AxonConfig, path: str | Path) -> None:
    """Serialize an AxonConfig to YAML with a header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# axon-parser configuration\n")
        f.write("# Edit this file to choose exported schemas, output format, etc.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)


def generate_default_config(
    input_path: str,
    output_dir: str = "outputs/",
    output_format: Literal["csv", "parquet"] = "parquet",
) -> AxonConfig:
    """Build an AxonConfig for a first run.

    All data blocks are exported (``tables`` left empty) with the
    lenient parse options.
    """
    return AxonConfig(
        source=SourceConfig(input_path=input_path),
        output=OutputConfig(output_dir=output_dir, output_format=output_format),
    )


def validate_tables_against_result(
    config: AxonConfig, available_schemas: set[str]
) -> None:
    """Check that every schema named in ``config.tables`` exists in the document.

    Args:
        config: The loaded AxonConfig.
        available_schemas: Schema names declared in the parsed document.

    Raises:
        ConfigValidationError: If any listed schema is not declared.
    """
    missing = [name for name in config.tables if name not in available_schemas]
    if missing:
        raise ConfigValidationError(
            f"The following schemas in axonconfig.yaml are not declared in "
            f"the source document: {missing}\n"
            f"Available schemas: {sorted(available_schemas)}"
        )
    logger.info(
        "Config validation passed: %d table(s) selected",
        len(config.tables) or len(available_schemas),
    )
