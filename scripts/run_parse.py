"""
Demo script: parse AXON documents and export their tables via the public API.

Usage:
    uv run python scripts/run_parse.py                     # bundled sample
    uv run python scripts/run_parse.py path/to/doc.axon    # your own files
    uv run python scripts/run_parse.py --csv               # CSV instead of Parquet

Each input file gets its own output subdirectory and axonconfig YAML
under outputs/.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_INPUT_FILES = [
    "inputs/users.axon",
]

OUTPUT_ROOT = Path("outputs")

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_parse")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _describe(input_path: str) -> None:
    """Log the schemas and row counts of one document."""
    import axon_parser

    result = axon_parser.parse_file(input_path)
    for schema in result.schemas:
        fields = ", ".join(
            f"{f.name}:{f.type.code}{'?' if f.nullable else ''}" for f in schema.fields
        )
        log.info("  Schema '%s': %s", schema.name, fields)
    for block in result.data_blocks:
        log.info(
            "  Data '%s': %d rows (declared %d)",
            block.schema_name, block.row_count, block.declared_count,
        )


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    import axon_parser

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    output_format = "csv" if "--csv" in sys.argv else "parquet"
    input_files = args or DEFAULT_INPUT_FILES

    for input_path in input_files:
        if not Path(input_path).exists():
            log.warning("SKIP  %s  (file not found)", input_path)
            continue

        name = Path(input_path).stem
        output_dir = str(OUTPUT_ROOT / name)
        config_path = str(OUTPUT_ROOT / f"{name}.yaml")

        log.info("=" * 70)
        log.info("Processing: %s", input_path)
        log.info("  output_dir  : %s", output_dir)
        log.info("  config_path : %s", config_path)
        log.info("=" * 70)

        try:
            _describe(input_path)
            written = axon_parser.export(
                input_path,
                output_dir=output_dir,
                output_format=output_format,
                config_path=config_path,
            )
        except axon_parser.AxonParseError as exc:
            log.error("FAILED  %s: %s", input_path, exc)
            continue

        for path in written:
            log.info("  wrote %s", path)
        log.info("Done: %s\n", name)

    log.info("All files processed.")


if __name__ == "__main__":
    main()
