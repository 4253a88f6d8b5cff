"""
Custom exception hierarchy for axon-parser.

Every fatal parse condition derives from ``AxonParseError`` so callers
can catch "the document is bad" separately from configuration or export
failures. Parse errors carry the 1-based line number and the offending
line text when the location is known.
"""

from __future__ import annotations


class AxonError(Exception):
    """Base exception for all axon-parser errors."""


class AxonParseError(AxonError):
    """Base class for fatal AXON parse errors.

    Attributes:
        line_number: 1-based line number of the offending line, if known.
        line: The offending line text (trimmed), if known.
    """

    def __init__(
        self,
        message: str,
        *,
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedDataHeaderError(AxonParseError):
    """Raised when a ``@data`` line does not match ``@data <Name>[<count>]``."""


class UnknownSchemaError(AxonParseError):
    """Raised when a data block references a schema not declared before it."""

    def __init__(self, message: str, *, schema_name: str, **kwargs) -> None:
        self.schema_name = schema_name
        super().__init__(message, **kwargs)


class UnknownTypeCodeError(AxonParseError):
    """Raised when a field's type code is not one of ``S``, ``I``, ``F``, ``B``, ``T``."""

    def __init__(self, message: str, *, type_code: str, **kwargs) -> None:
        self.type_code = type_code
        super().__init__(message, **kwargs)


class ValueCoercionError(AxonParseError):
    """Raised when a raw row value cannot be parsed as its declared numeric type."""

    def __init__(self, message: str, *, raw: str, scalar_type: object, **kwargs) -> None:
        self.raw = raw
        self.scalar_type = scalar_type
        super().__init__(message, **kwargs)


class UnterminatedBlockError(AxonParseError):
    """Raised when a block reaches end of input without ``@end``.

    Only raised when ``ParseOptions.require_end`` is enabled; the default
    policy ends the block at end of input and logs a warning.
    """


class ConfigValidationError(AxonError):
    """Raised when an axonconfig.yaml fails validation.

    This can happen if:
    - The file is empty.
    - ``tables`` references schema names that the document does not declare.
    """


class ExportError(AxonError):
    """Raised when the exporter fails to write output files.

    For example, permission errors, disk full, or unsupported format.
    """
