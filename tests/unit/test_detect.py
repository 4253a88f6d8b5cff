"""
Unit tests for line classification (axon_parser.detect).

The classifier is keyword-based rather than prefix-based, so directive
look-alikes (``@schemata``, ``@database``) must not open blocks.
"""

import pytest

from axon_parser.detect import LineKind, classify_line, directive_argument


class TestClassifyLine:
    """Tests for classify_line()."""

    @pytest.mark.parametrize("line", ["", "   ", "\t\r"])
    def test_blank(self, line):
        assert classify_line(line) is LineKind.BLANK

    @pytest.mark.parametrize("line", ["@end", "  @end  ", "@end\r"])
    def test_end(self, line):
        assert classify_line(line) is LineKind.END

    def test_end_with_trailing_text_is_other(self):
        assert classify_line("@end here") is LineKind.OTHER

    @pytest.mark.parametrize("line", ["@schema User", "  @schema\tUser", "@schema"])
    def test_schema_header(self, line):
        assert classify_line(line) is LineKind.SCHEMA_HEADER

    @pytest.mark.parametrize("line", ["@data User[3]", "@data   User[0]", "@data"])
    def test_data_header(self, line):
        assert classify_line(line) is LineKind.DATA_HEADER

    def test_malformed_data_header_is_still_data_header(self):
        """Header grammar is checked by the data parser, not the classifier."""
        assert classify_line("@data !!!") is LineKind.DATA_HEADER

    @pytest.mark.parametrize("line", ["@data[2]", "@data:User[2]", "@data(User)[2]"])
    def test_punctuation_ends_data_keyword(self, line):
        assert classify_line(line) is LineKind.DATA_HEADER

    def test_punctuation_ends_schema_keyword(self):
        assert classify_line("@schema:User") is LineKind.SCHEMA_HEADER

    @pytest.mark.parametrize(
        "line",
        ["@schemata Foo", "@database", "@dataUser[3]", "@data_1[2]", "@data2[1]", "@other x", "id:I", "1|a|b"],
    )
    def test_lookalikes_are_other(self, line):
        assert classify_line(line) is LineKind.OTHER


class TestDirectiveArgument:
    """Tests for directive_argument()."""

    def test_extracts_trimmed_name(self):
        assert directive_argument("  @schema   User  ", "@schema") == "User"

    def test_empty_name(self):
        assert directive_argument("@schema", "@schema") == ""

    def test_name_with_spaces_kept(self):
        assert directive_argument("@schema My Schema", "@schema") == "My Schema"

    def test_wrong_keyword_raises(self):
        with pytest.raises(ValueError):
            directive_argument("@data X[1]", "@schema")
