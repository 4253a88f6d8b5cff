"""
Line classification for AXON documents.

Every line the document parser looks at is classified into a tagged
``LineKind`` before dispatch, instead of testing raw string prefixes.
A directive keyword only counts when the next character cannot continue
an identifier, so ``@schemata`` or ``@database`` are plain text and never
open a block, while ``@data[2]`` is still a (malformed) data header.

Classification rules (applied to the trimmed line):
1. Empty                          -> BLANK
2. Exactly ``@end``               -> END
3. Keyword ``@schema``            -> SCHEMA_HEADER
4. Keyword ``@data``              -> DATA_HEADER
5. Anything else                  -> OTHER
"""

from __future__ import annotations

import re
from enum import Enum

from axon_parser.lines import trim

SCHEMA_KEYWORD = "@schema"
DATA_KEYWORD = "@data"
END_KEYWORD = "@end"

# Leading "@word" not followed by an identifier character
_DIRECTIVE_RE = re.compile(r"(@[A-Za-z]+)(?![A-Za-z0-9_])")


class LineKind(Enum):
    """Tagged classification of a single document line."""

    BLANK = "blank"
    END = "end"
    SCHEMA_HEADER = "schema_header"
    DATA_HEADER = "data_header"
    OTHER = "other"


def classify_line(line: str) -> LineKind:
    """Classify a raw line. Trimming is applied here."""
    text = trim(line)
    if not text:
        return LineKind.BLANK
    if text == END_KEYWORD:
        return LineKind.END

    match = _DIRECTIVE_RE.match(text)
    if match is None:
        return LineKind.OTHER
    keyword = match.group(1)
    if keyword == SCHEMA_KEYWORD:
        return LineKind.SCHEMA_HEADER
    if keyword == DATA_KEYWORD:
        return LineKind.DATA_HEADER
    return LineKind.OTHER


def directive_argument(line: str, keyword: str) -> str:
    """Return the trimmed text after *keyword* on a header line.

    Example: ``directive_argument("@schema  User ", "@schema") -> "User"``
    """
    text = trim(line)
    if not text.startswith(keyword):
        raise ValueError(f"Line does not start with {keyword!r}: {line!r}")
    return trim(text[len(keyword):])
