"""
Base block parser for axon-parser.

Both block kinds (``@schema`` and ``@data``) share the same outer shape:
a header line, a body of non-blank lines, and a closing ``@end``. The
contract for every block parser is:

1. ``parse()`` receives the ``LineCursor`` positioned on the header line.
2. It consumes the header, the body, and the ``@end`` line.
3. It leaves the cursor on the first line after the block and returns
   the parsed value.

``BlockParser`` owns the body loop so the end-of-block rules (blank
lines skipped, ``@end`` terminates, end-of-input handling) live in one
place.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Generic, TypeVar

from axon_parser.config import ParseOptions
from axon_parser.detect import LineKind, classify_line
from axon_parser.exceptions import UnterminatedBlockError
from axon_parser.lines import LineCursor, trim

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BlockParser(ABC, Generic[T]):
    """Abstract base class for AXON block parsers."""

    def __init__(self, options: ParseOptions | None = None) -> None:
        self.options = options or ParseOptions()

    @abstractmethod
    def parse(self, cursor: LineCursor) -> T:
        """Parse one block starting at the cursor's header line.

        Args:
            cursor: Cursor positioned on the block header.

        Returns:
            The parsed block value.

        Raises:
            AxonParseError: If the block is malformed.
        """

    def _body_lines(
        self, cursor: LineCursor, header: str, header_line_number: int
    ) -> Iterator[tuple[int, str]]:
        """Yield ``(line_number, trimmed_line)`` for each non-blank body line.

        Stops after consuming ``@end``. If input runs out first, the
        block either ends there with a warning or raises
        ``UnterminatedBlockError``, depending on ``options.require_end``.
        """
        while not cursor.at_end:
            line_number = cursor.line_number
            raw = cursor.current
            cursor.advance()

            kind = classify_line(raw)
            if kind is LineKind.END:
                return
            if kind is LineKind.BLANK:
                continue
            yield line_number, trim(raw)

        if self.options.require_end:
            raise UnterminatedBlockError(
                f"Block reached end of input without @end: {header!r}",
                line_number=header_line_number,
                line=header,
            )
        logger.warning(
            "Block opened at line %d (%s) has no @end; ended at end of input",
            header_line_number, header,
        )
