"""
Data block parser.

Input structure:
  @data <Name>[<count>]
  v1|v2|...|vn
  ...
  @end

Header rules:
  - Must match ``@data <identifier>[<digits>]`` (whitespace between
    ``@data`` and the identifier). Trailing text after ``]`` is ignored.
  - ``<identifier>`` is resolved against the schemas parsed so far,
    first match wins.
  - ``<digits>`` becomes ``declared_count``; it is never compared with
    the actual row count.

Row rules:
  Each non-blank body line is tokenized and zipped positionally with the
  schema's fields. Short rows omit trailing fields, extra values are
  dropped, and ``_`` is Null for any field.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from axon_parser.config import ParseOptions
from axon_parser.exceptions import (
    MalformedDataHeaderError,
    UnknownSchemaError,
    ValueCoercionError,
)
from axon_parser.lines import LineCursor, trim
from axon_parser.model import DataBlock, Record, Schema, find_schema
from axon_parser.parsers.base import BlockParser
from axon_parser.scalars import coerce_field
from axon_parser.tokenizer import split_row

logger = logging.getLogger(__name__)

_DATA_HEADER_RE = re.compile(r"@data\s+(\w+)\[(\d+)\]", re.ASCII)


def parse_data_header(header: str) -> tuple[str, int]:
    """Extract ``(schema_name, declared_count)`` from a ``@data`` header.

    Raises:
        MalformedDataHeaderError: If the header does not match the pattern.
    """
    match = _DATA_HEADER_RE.match(trim(header))
    if match is None:
        raise MalformedDataHeaderError(f"Invalid @data header: {header!r}")
    return match.group(1), int(match.group(2))


def build_record(values: list[str], schema: Schema) -> Record:
    """Zip raw values against the schema's fields and coerce each one.

    Raises:
        ValueCoercionError: If a numeric value is malformed.
    """
    record: Record = {}
    for field, raw in zip(schema.fields, values):
        record[field.name] = coerce_field(raw, field)
    return record


class DataBlockParser(BlockParser[DataBlock]):
    """Parser for ``@data`` blocks.

    Args:
        schemas: Schemas declared earlier in the document.
        options: Parse options.
    """

    def __init__(
        self,
        schemas: Sequence[Schema],
        options: ParseOptions | None = None,
    ) -> None:
        super().__init__(options)
        self.schemas = schemas

    def resolve_schema(self, name: str) -> Schema | None:
        return find_schema(self.schemas, name)

    def parse(self, cursor: LineCursor) -> DataBlock:
        header_line_number = cursor.line_number
        header = trim(cursor.current)
        cursor.advance()

        try:
            schema_name, declared_count = parse_data_header(header)
        except MalformedDataHeaderError as exc:
            raise MalformedDataHeaderError(
                str(exc), line_number=header_line_number, line=header
            ) from exc

        schema = self.resolve_schema(schema_name)
        if schema is None:
            raise UnknownSchemaError(
                f"Schema not found: '{schema_name}'",
                schema_name=schema_name,
                line_number=header_line_number,
                line=header,
            )

        rows: list[Record] = []
        for line_number, line in self._body_lines(cursor, header, header_line_number):
            values = split_row(line)
            try:
                rows.append(build_record(values, schema))
            except ValueCoercionError as exc:
                raise ValueCoercionError(
                    f"{exc} in data block '{schema_name}': {line!r}",
                    raw=exc.raw,
                    scalar_type=exc.scalar_type,
                    line_number=line_number,
                    line=line,
                ) from exc

        logger.debug(
            "Parsed data block '%s': %d row(s), declared %d",
            schema_name, len(rows), declared_count,
        )
        return DataBlock(
            schema_name=schema_name,
            declared_count=declared_count,
            rows=tuple(rows),
        )
