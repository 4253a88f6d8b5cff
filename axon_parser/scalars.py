"""
Type codes and value coercion for AXON fields.

Maps one-character type codes to ``ScalarType`` and converts raw row
tokens into typed values:

- ``_`` is the null sentinel and yields ``None`` for every type,
  nullable or not.
- String: escape expansion, then returned as-is.
- Integer: base-10, signed 64-bit. Malformed or out-of-range text is fatal.
- Float: decimal (``1``, ``-2.5``, ``.5``, ``1e-3``) or ``inf``/``nan``.
  Malformed text is fatal.
- Boolean: ``True`` only for exactly ``"1"``; anything else is ``False``.
- Timestamp: returned verbatim, no escape expansion, no validation.

Number parsing is locale-independent and deliberately stricter than
Python's ``int()``/``float()``, which also accept underscores and
surrounding whitespace.
"""

from __future__ import annotations

import re

from axon_parser.exceptions import UnknownTypeCodeError, ValueCoercionError
from axon_parser.model import FieldDefinition, ScalarType, Value
from axon_parser.tokenizer import ESCAPE, unescape_char

NULL_SENTINEL = "_"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)

_TYPE_CODES: dict[str, ScalarType] = {t.value: t for t in ScalarType}


def parse_type_code(code: str) -> ScalarType:
    """Map a type code character to a ``ScalarType``.

    Raises:
        UnknownTypeCodeError: If *code* is not ``S``, ``I``, ``F``, ``B`` or ``T``.
    """
    scalar_type = _TYPE_CODES.get(code)
    if scalar_type is None:
        raise UnknownTypeCodeError(f"Unknown type code: {code!r}", type_code=code)
    return scalar_type


def unescape(value: str) -> str:
    """Expand backslash escapes (``\\n``, ``\\t``, ``\\r``; others pass through).

    A lone trailing backslash is kept as a literal backslash.
    """
    if ESCAPE not in value:
        return value

    out: list[str] = []
    escaped = False
    for c in value:
        if escaped:
            out.append(unescape_char(c))
            escaped = False
        elif c == ESCAPE:
            escaped = True
        else:
            out.append(c)
    if escaped:
        out.append(ESCAPE)
    return "".join(out)


def _parse_integer(raw: str) -> int:
    if not _INTEGER_RE.fullmatch(raw):
        raise ValueCoercionError(
            f"Invalid integer value: {raw!r}",
            raw=raw, scalar_type=ScalarType.INTEGER,
        )
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueCoercionError(
            f"Integer value out of 64-bit range: {raw!r}",
            raw=raw, scalar_type=ScalarType.INTEGER,
        )
    return value


def _parse_float(raw: str) -> float:
    if not _FLOAT_RE.fullmatch(raw):
        raise ValueCoercionError(
            f"Invalid float value: {raw!r}",
            raw=raw, scalar_type=ScalarType.FLOAT,
        )
    return float(raw)


def coerce_value(raw: str, scalar_type: ScalarType) -> Value:
    """Convert a non-null raw token into a typed value.

    Raises:
        ValueCoercionError: If a numeric token is malformed.
    """
    if scalar_type is ScalarType.STRING:
        return unescape(raw)
    if scalar_type is ScalarType.INTEGER:
        return _parse_integer(raw)
    if scalar_type is ScalarType.FLOAT:
        return _parse_float(raw)
    if scalar_type is ScalarType.BOOLEAN:
        return raw == "1"
    # Timestamp
    return raw


def coerce_field(raw: str, field: FieldDefinition) -> Value:
    """Apply the null sentinel rule, then coerce *raw* for *field*."""
    if raw == NULL_SENTINEL:
        return None
    return coerce_value(raw, field.type)
