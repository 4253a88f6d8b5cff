"""
Unit tests for the data block parser (axon_parser.parsers.data).
"""

import pytest

from axon_parser.config import ParseOptions
from axon_parser.exceptions import (
    MalformedDataHeaderError,
    UnknownSchemaError,
    UnterminatedBlockError,
    ValueCoercionError,
)
from axon_parser.lines import LineCursor, split_lines
from axon_parser.model import FieldDefinition, ScalarType, Schema
from axon_parser.parsers.data import DataBlockParser, build_record, parse_data_header

USER = Schema(
    "User",
    (
        FieldDefinition("id", ScalarType.INTEGER),
        FieldDefinition("name", ScalarType.STRING),
        FieldDefinition("email", ScalarType.STRING),
        FieldDefinition("active", ScalarType.BOOLEAN),
        FieldDefinition("age", ScalarType.INTEGER, nullable=True),
    ),
)


def _parse(text: str, schemas=(USER,), **options):
    cursor = LineCursor(split_lines(text))
    block = DataBlockParser(list(schemas), ParseOptions(**options)).parse(cursor)
    return block, cursor


class TestParseDataHeader:
    """Tests for parse_data_header()."""

    def test_valid_header(self):
        assert parse_data_header("@data User[3]") == ("User", 3)

    def test_whitespace_tolerant(self):
        assert parse_data_header("  @data \t User[0]  ") == ("User", 0)

    def test_trailing_text_tolerated(self):
        assert parse_data_header("@data User[2] extra") == ("User", 2)

    @pytest.mark.parametrize(
        "header",
        ["@data User", "@data User[]", "@data User[x]", "@data [3]", "@data User [3]", "@data"],
    )
    def test_malformed_headers_raise(self, header):
        with pytest.raises(MalformedDataHeaderError, match="Invalid @data header"):
            parse_data_header(header)


class TestBuildRecord:
    """Tests for build_record()."""

    def test_full_row(self):
        record = build_record(["1", "Alice", "alice@example.com", "1", "28"], USER)
        assert record == {
            "id": 1, "name": "Alice", "email": "alice@example.com",
            "active": True, "age": 28,
        }

    def test_short_row_omits_trailing_fields(self):
        record = build_record(["1", "Alice"], USER)
        assert record == {"id": 1, "name": "Alice"}

    def test_long_row_ignores_extras(self):
        record = build_record(["1", "A", "a@x", "0", "5", "extra", "more"], USER)
        assert set(record) == set(USER.field_names)

    def test_null_sentinel_for_non_nullable_field(self):
        """Nullability is not enforced: ``_`` is always Null."""
        record = build_record(["_", "_", "_", "_", "_"], USER)
        assert all(v is None for v in record.values())

    def test_duplicate_field_names_last_wins(self):
        schema = Schema("D", (FieldDefinition("x", ScalarType.INTEGER), FieldDefinition("x", ScalarType.STRING)))
        assert build_record(["1", "b"], schema) == {"x": "b"}


class TestDataBlockParser:
    """Tests for DataBlockParser.parse()."""

    def test_user_block(self):
        block, cursor = _parse(
            "@data User[3]\n"
            "1|Alice|alice@example.com|1|28\n"
            "2|Bob|bob@example.com|0|_\n"
            "3|Carol|carol@example.com|1|35\n"
            "@end\n"
        )
        assert block.schema_name == "User"
        assert block.declared_count == 3
        assert block.row_count == 3
        assert block.rows[0]["active"] is True
        assert block.rows[1]["active"] is False
        assert block.rows[1]["age"] is None
        assert block.rows[2]["id"] == 3
        assert cursor.at_end

    def test_declared_count_not_validated(self):
        block, _ = _parse("@data User[10]\n1|A|a@x|1|1\n@end")
        assert block.declared_count == 10
        assert block.row_count == 1

    def test_blank_lines_skipped(self):
        block, _ = _parse("@data User[2]\n\n1|A|a|1|1\n   \n2|B|b|0|2\n@end")
        assert [r["id"] for r in block.rows] == [1, 2]

    def test_empty_block(self):
        block, _ = _parse("@data User[0]\n@end")
        assert block.rows == ()

    def test_cursor_left_after_end(self):
        _, cursor = _parse("@data User[0]\n@end\nafter")
        assert cursor.current == "after"

    def test_first_matching_schema_wins(self):
        first = Schema("User", (FieldDefinition("v", ScalarType.INTEGER),))
        second = Schema("User", (FieldDefinition("v", ScalarType.STRING),))
        block, _ = _parse("@data User[1]\n42\n@end", schemas=(first, second))
        assert block.rows[0] == {"v": 42}

    def test_unknown_schema_raises(self):
        with pytest.raises(UnknownSchemaError, match="Ghost") as excinfo:
            _parse("@data Ghost[1]\nx\n@end")
        assert excinfo.value.schema_name == "Ghost"
        assert excinfo.value.line_number == 1

    def test_malformed_header_reports_line(self):
        with pytest.raises(MalformedDataHeaderError, match="line 1") as excinfo:
            _parse("@data User(3)\n@end")
        assert excinfo.value.line == "@data User(3)"

    def test_coercion_error_reports_line(self):
        with pytest.raises(ValueCoercionError, match="line 3") as excinfo:
            _parse("@data User[2]\n1|A|a|1|1\nxx|B|b|0|2\n@end")
        assert excinfo.value.raw == "xx"
        assert excinfo.value.line == "xx|B|b|0|2"

    def test_missing_end_is_lenient_by_default(self):
        block, cursor = _parse("@data User[1]\n1|A|a|1|1")
        assert block.row_count == 1
        assert cursor.at_end

    def test_missing_end_raises_when_required(self):
        with pytest.raises(UnterminatedBlockError):
            _parse("@data User[1]\n1|A|a|1|1", require_end=True)

    def test_nested_header_is_treated_as_row(self):
        """Only @end closes a block; other directives are row text."""
        schema = Schema("Note", (FieldDefinition("text", ScalarType.STRING),))
        block, _ = _parse("@data Note[1]\n@schema X\n@end", schemas=(schema,))
        assert block.rows[0] == {"text": "@schema X"}
