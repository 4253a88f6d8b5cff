"""
Schema block parser.

Input structure:
  @schema <Name>
  <field>:<type_code>[?]
  ...
  @end

Field line rules:
  - Split on the first ``:``. Left side (trimmed) is the field name,
    right side (trimmed) is the type specifier.
  - A trailing ``?`` marks the field nullable and is stripped.
  - Only the first character of what remains is the type code; any
    further characters are ignored (``x:Integer`` is an ``I`` field).
  - Lines without a colon are skipped.
"""

from __future__ import annotations

import logging

from axon_parser.detect import SCHEMA_KEYWORD, directive_argument
from axon_parser.exceptions import UnknownTypeCodeError
from axon_parser.lines import LineCursor, trim
from axon_parser.model import FieldDefinition, Schema
from axon_parser.parsers.base import BlockParser
from axon_parser.scalars import parse_type_code

logger = logging.getLogger(__name__)


def parse_field_line(line: str) -> FieldDefinition | None:
    """Parse one ``name:type[?]`` line. Returns ``None`` if there is no colon.

    Raises:
        UnknownTypeCodeError: If the type code is missing or unrecognised.
    """
    name, sep, spec = line.partition(":")
    if not sep:
        return None

    name = trim(name)
    spec = trim(spec)
    nullable = spec.endswith("?")
    if nullable:
        spec = spec[:-1]

    return FieldDefinition(name=name, type=parse_type_code(spec[:1]), nullable=nullable)


class SchemaBlockParser(BlockParser[Schema]):
    """Parser for ``@schema`` blocks."""

    def parse(self, cursor: LineCursor) -> Schema:
        header_line_number = cursor.line_number
        header = trim(cursor.current)
        cursor.advance()

        name = directive_argument(header, SCHEMA_KEYWORD)
        fields: list[FieldDefinition] = []

        for line_number, line in self._body_lines(cursor, header, header_line_number):
            try:
                field = parse_field_line(line)
            except UnknownTypeCodeError as exc:
                raise UnknownTypeCodeError(
                    f"Unknown type code {exc.type_code!r} for field in schema "
                    f"'{name}': {line!r}",
                    type_code=exc.type_code,
                    line_number=line_number,
                    line=line,
                ) from exc
            if field is None:
                logger.debug("Schema '%s': skipping line %d without ':'", name, line_number)
                continue
            fields.append(field)

        logger.debug("Parsed schema '%s' with %d field(s)", name, len(fields))
        return Schema(name=name, fields=tuple(fields))
