"""
Unit tests for the exporter (axon_parser.export).

Tests CSV and Parquet export, directory creation, error handling,
and that nullable dtypes survive Parquet, using pytest's tmp_path fixture.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq
import pytest

from axon_parser.document import parse
from axon_parser.exceptions import ExportError
from axon_parser.export import export_tables
from axon_parser.frames import select_blocks, table_names, to_frames
from axon_parser.meta import build_meta_table, build_schema_table


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _prepare(text: str):
    result = parse(text)
    blocks = select_blocks(result)
    tables = to_frames(result)
    meta_df = build_meta_table(result, table_names(blocks), blocks)
    return tables, meta_df, build_schema_table(result)


# ---------------------------------------------------------------------------
# CSV export tests
# ---------------------------------------------------------------------------

class TestExportCSV:
    """Tests for CSV export."""

    def test_basic_csv_export(self, tmp_path, user_document):
        tables, meta_df, _ = _prepare(user_document)
        paths = export_tables(tables, meta_df, tmp_path, output_format="csv")

        assert len(paths) == 2  # User + _meta
        assert all(p.endswith(".csv") for p in paths)
        assert (tmp_path / "User.csv").exists()
        assert (tmp_path / "_meta.csv").exists()
        assert not (tmp_path / "_schemas.csv").exists()

    def test_csv_round_trip(self, tmp_path, user_document):
        tables, meta_df, _ = _prepare(user_document)
        export_tables(tables, meta_df, tmp_path, output_format="csv")

        loaded = pd.read_csv(tmp_path / "User.csv", encoding="utf-8-sig")
        assert list(loaded.columns) == ["id", "name", "email", "active", "age"]
        assert loaded["name"].tolist() == ["Alice", "Bob", "Carol"]
        assert pd.isna(loaded["age"].iloc[1])

    def test_write_order_with_schemas(self, tmp_path, user_document):
        tables, meta_df, schemas_df = _prepare(user_document)
        paths = export_tables(tables, meta_df, tmp_path, output_format="csv", schemas_df=schemas_df)
        assert [Path(p).name for p in paths] == ["User.csv", "_meta.csv", "_schemas.csv"]
        loaded = pd.read_csv(tmp_path / "_schemas.csv", encoding="utf-8-sig")
        assert loaded["field_name"].tolist() == ["id", "name", "email", "active", "age"]

    def test_csv_has_bom(self, tmp_path, user_document):
        tables, meta_df, _ = _prepare(user_document)
        export_tables(tables, meta_df, tmp_path, output_format="csv")
        assert (tmp_path / "User.csv").read_bytes().startswith(b"\xef\xbb\xbf")


# ---------------------------------------------------------------------------
# Parquet export tests
# ---------------------------------------------------------------------------

class TestExportParquet:
    """Tests for Parquet export."""

    def test_basic_parquet_export(self, tmp_path, user_document):
        tables, meta_df, schemas_df = _prepare(user_document)
        paths = export_tables(tables, meta_df, tmp_path, schemas_df=schemas_df)

        assert [Path(p).name for p in paths] == [
            "User.parquet", "_meta.parquet", "_schemas.parquet",
        ]

    def test_arrow_types(self, tmp_path, user_document):
        tables, meta_df, _ = _prepare(user_document)
        export_tables(tables, meta_df, tmp_path)

        schema = pq.read_schema(tmp_path / "User.parquet")
        assert schema.field("id").type == pa.int64()
        # pandas 3 writes the "string" dtype as large_string
        name_type = schema.field("name").type
        assert pa.types.is_string(name_type) or pa.types.is_large_string(name_type)
        assert schema.field("active").type == pa.bool_()
        assert schema.field("age").type == pa.int64()

    def test_parquet_round_trip(self, tmp_path, user_document):
        tables, meta_df, _ = _prepare(user_document)
        export_tables(tables, meta_df, tmp_path)

        loaded = pd.read_parquet(tmp_path / "User.parquet")
        assert loaded["id"].tolist() == [1, 2, 3]
        assert pd.isna(loaded["age"].iloc[1])
        assert loaded["age"].iloc[2] == 35


# ---------------------------------------------------------------------------
# General behaviour
# ---------------------------------------------------------------------------

class TestExportGeneral:
    """Directory handling and error cases."""

    def test_creates_output_dir(self, tmp_path, user_document):
        tables, meta_df, _ = _prepare(user_document)
        out = tmp_path / "a" / "b"
        export_tables(tables, meta_df, out, output_format="csv")
        assert (out / "User.csv").exists()

    def test_no_data_tables_still_writes_meta(self, tmp_path):
        tables, meta_df, _ = _prepare("@schema A\nx:I\n@end\n")
        paths = export_tables(tables, meta_df, tmp_path, output_format="csv")
        assert len(paths) == 1
        assert paths[0].endswith("_meta.csv")

    def test_unsupported_format(self, tmp_path, user_document):
        tables, meta_df, _ = _prepare(user_document)
        with pytest.raises(ExportError, match="Unsupported output format"):
            export_tables(tables, meta_df, tmp_path, output_format="xlsx")

    def test_write_failure_wrapped(self, tmp_path, user_document):
        tables, meta_df, _ = _prepare(user_document)
        blocker = tmp_path / "out"
        blocker.mkdir()
        (blocker / "User.csv").mkdir()  # a directory where the file should go
        with pytest.raises(ExportError, match="User.csv"):
            export_tables(tables, meta_df, blocker, output_format="csv")
