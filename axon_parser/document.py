"""
Document parser: the single top-to-bottom pass over an AXON document.

State machine over the segmented lines:

- SCHEMA_HEADER -> SchemaBlockParser consumes through its ``@end``;
  the schema is appended.
- DATA_HEADER   -> DataBlockParser (against schemas seen so far)
  consumes through its ``@end``; the block is appended.
- anything else -> skipped (blank lines, stray text, stray ``@end``).

The cursor is only advanced by the block parsers or by the skip branch,
so every line is visited exactly once and nothing backtracks.
"""

from __future__ import annotations

import logging

from axon_parser.config import ParseOptions
from axon_parser.detect import LineKind, classify_line
from axon_parser.lines import LineCursor, split_lines
from axon_parser.model import DataBlock, ParseResult, Schema
from axon_parser.parsers.data import DataBlockParser
from axon_parser.parsers.schema import SchemaBlockParser

logger = logging.getLogger(__name__)


class DocumentParser:
    """Parses a whole AXON document into a ``ParseResult``.

    The parser is stateless between calls; each ``parse()`` builds a
    fresh result.
    """

    def __init__(self, options: ParseOptions | None = None) -> None:
        self.options = options or ParseOptions()

    def parse(self, text: str) -> ParseResult:
        """Parse *text*.

        Raises:
            AxonParseError: On the first fatal condition. No partial
                result is returned.
        """
        cursor = LineCursor(split_lines(text))
        schemas: list[Schema] = []
        data_blocks: list[DataBlock] = []
        schema_parser = SchemaBlockParser(self.options)

        while not cursor.at_end:
            kind = classify_line(cursor.current)
            if kind is LineKind.SCHEMA_HEADER:
                schemas.append(schema_parser.parse(cursor))
            elif kind is LineKind.DATA_HEADER:
                data_parser = DataBlockParser(schemas, self.options)
                data_blocks.append(data_parser.parse(cursor))
            else:
                cursor.advance()

        result = ParseResult(schemas=tuple(schemas), data_blocks=tuple(data_blocks))
        logger.info(
            "Parsed %d schema(s), %d data block(s), %d row(s)",
            len(result.schemas),
            len(result.data_blocks),
            sum(b.row_count for b in result.data_blocks),
        )
        return result


def parse(text: str, options: ParseOptions | None = None) -> ParseResult:
    """Parse an AXON document held in memory."""
    return DocumentParser(options).parse(text)
