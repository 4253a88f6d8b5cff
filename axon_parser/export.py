"""
Table writer for axon-parser.

Every exported table lands in one directory as ``<name>.<format>``:
the data tables in document order, then ``_meta``, then ``_schemas``
when it was built. Parquet goes through pyarrow and keeps the nullable
dtypes; CSV carries a UTF-8 BOM.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Literal

import pandas as pd

from axon_parser.exceptions import ExportError

logger = logging.getLogger(__name__)


def _to_csv(df: pd.DataFrame, path: Path) -> None:
    df.to_csv(path, index=False, encoding="utf-8-sig")


def _to_parquet(df: pd.DataFrame, path: Path) -> None:
    df.to_parquet(path, index=False, engine="pyarrow")


_WRITERS: dict[str, Callable[[pd.DataFrame, Path], None]] = {
    "csv": _to_csv,
    "parquet": _to_parquet,
}


def export_tables(
    tables: dict[str, pd.DataFrame],
    meta_df: pd.DataFrame,
    output_dir: str | Path,
    output_format: Literal["csv", "parquet"] = "parquet",
    schemas_df: pd.DataFrame | None = None,
) -> list[str]:
    """Write the data tables and the description tables into *output_dir*.

    Returns:
        Paths written, in write order.

    Raises:
        ExportError: On an unknown *output_format* or a failed write.
    """
    writer = _WRITERS.get(output_format)
    if writer is None:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_WRITERS)}"
        )

    plan = list(tables.items())
    plan.append(("_meta", meta_df))
    if schemas_df is not None:
        plan.append(("_schemas", schemas_df))

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    written: list[str] = []
    for name, df in plan:
        path = out / f"{name}.{output_format}"
        try:
            writer(df, path)
        except Exception as exc:
            raise ExportError(f"Failed to write {path.name} as {output_format}: {exc}") from exc
        logger.info("Wrote %s (%d x %d)", path.name, *df.shape)
        written.append(str(path))
    return written
