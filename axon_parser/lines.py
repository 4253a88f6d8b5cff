"""
Line segmentation, trimming and the line cursor.

The whole document is materialised as a list of lines up front; block
parsers then walk it through a ``LineCursor``. The cursor is owned by
the document parser and handed to one block parser at a time, which
advances it through its own contiguous range (up to and including its
``@end``) and leaves it on the first line after the block.
"""

from __future__ import annotations

_ASCII_WHITESPACE = " \t\n\r\f\v"


def split_lines(text: str) -> list[str]:
    """Split *text* into lines on ``\\n``.

    Carriage returns are left in place (``trim`` removes them later).
    A trailing newline does not produce a final empty line, and empty
    input yields an empty list.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def trim(s: str) -> str:
    """Strip leading/trailing ASCII whitespace. Never raises on empty input."""
    return s.strip(_ASCII_WHITESPACE)


class LineCursor:
    """Forward-only cursor over a list of lines."""

    def __init__(self, lines: list[str]) -> None:
        self._lines = lines
        self._index = 0

    def __repr__(self) -> str:
        return f"LineCursor(index={self._index}, total={len(self._lines)})"

    @property
    def index(self) -> int:
        return self._index

    @property
    def line_number(self) -> int:
        """1-based number of the current line."""
        return self._index + 1

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._lines)

    @property
    def current(self) -> str:
        """The raw (untrimmed) current line.

        Raises:
            IndexError: If the cursor is past the last line.
        """
        if self.at_end:
            raise IndexError("LineCursor is at end of input")
        return self._lines[self._index]

    def advance(self) -> None:
        if not self.at_end:
            self._index += 1
