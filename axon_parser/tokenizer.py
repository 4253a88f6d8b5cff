"""
Row tokenizer for AXON data lines.

Splits one data row into raw value strings. The scanner tracks two
flags while walking the line left to right:

- ``in_string``: toggled by an unescaped ``"``. Quote characters are
  never emitted, and a ``|`` inside a string is literal text.
- ``escaped``: set by an unescaped ``\\``. The next character is
  expanded (``n``/``t``/``r`` -> LF/TAB/CR, anything else as itself)
  and is never read as a delimiter or quote.

Policies for inputs the grammar leaves open:

- An empty line has **zero** tokens.
- End of line always flushes the current token, so ``a|`` yields
  ``["a", ""]``. The final token is emitted even when it is empty or
  only a backslash: ``a|""`` gives ``["a", ""]`` and ``a|\\`` gives
  ``["a", "\\"]``, where a scanner that flushed only non-empty tokens
  would drop it.
- A lone trailing backslash is kept as a literal ``\\``.
- An unclosed quote runs to the end of the line; its text is kept.

``count_fields`` and ``field_at`` answer positional questions about a
raw row without building the full token list.
"""

from __future__ import annotations

from collections.abc import Iterator

DELIMITER = "|"
QUOTE = '"'
ESCAPE = "\\"

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


def unescape_char(c: str) -> str:
    """Expand the character following a backslash."""
    return _ESCAPES.get(c, c)


def _scan(line: str) -> Iterator[str]:
    """Yield tokens of a non-empty row one at a time."""
    current: list[str] = []
    in_string = False
    escaped = False

    for c in line:
        if escaped:
            current.append(unescape_char(c))
            escaped = False
        elif c == ESCAPE:
            escaped = True
        elif c == QUOTE:
            in_string = not in_string
        elif c == DELIMITER and not in_string:
            yield "".join(current)
            current = []
        else:
            current.append(c)

    if escaped:
        current.append(ESCAPE)
    yield "".join(current)


def split_row(line: str) -> list[str]:
    """Split a data row into raw value strings.

    Args:
        line: One trimmed data line.

    Returns:
        Raw tokens in order. ``[]`` for an empty line.
    """
    if not line:
        return []
    return list(_scan(line))


def count_fields(line: str) -> int:
    """Number of values ``split_row`` would produce for *line*."""
    if not line:
        return 0
    return sum(1 for _ in _scan(line))


def field_at(line: str, index: int) -> str | None:
    """Return the raw value at *index*, or ``None`` if out of range."""
    if index < 0 or not line:
        return None
    for i, token in enumerate(_scan(line)):
        if i == index:
            return token
    return None
