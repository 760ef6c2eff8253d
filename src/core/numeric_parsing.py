"""Checked cursor-based numeric token parsing.

This module reads decimal tokens from a line one at a time. Each call
skips leading whitespace, consumes exactly one token, and returns the
parsed value with the cursor positioned right after it, so a caller can
walk a line without slicing intermediate strings.

Malformed tokens raise ``MalformedTokenError``; tokens that parse but do
not fit the target type raise ``TokenRangeError``.
"""

from __future__ import annotations

import math
import re

from core.constants import INT_TOKEN_MAX, INT_TOKEN_MIN
from core.errors import MalformedTokenError, TokenRangeError

_WHITESPACE_PATTERN = re.compile(r"\s*", re.ASCII)
_FLOAT_TOKEN_PATTERN = re.compile(
    r"[+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE | re.ASCII,
)
_INT_TOKEN_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
_NONZERO_DIGIT_PATTERN = re.compile(r"[1-9]")


def parse_float_token(
    text: str,
    cursor: int = 0,
    line_number: int | None = None,
) -> tuple[float, int]:
    """Parse one floating-point token starting at ``cursor``.

    Args:
        text: Line being parsed.
        cursor: Offset where scanning starts.
        line_number: Optional line number reported in errors.

    Returns:
        Pair of parsed value and offset just past the token.

    Raises:
        MalformedTokenError: If no float token starts at the cursor.
        TokenRangeError: If the token overflows or underflows a double.
    """
    start = _skip_whitespace(text, cursor)
    match = _FLOAT_TOKEN_PATTERN.match(text, start)
    if match is None:
        raise MalformedTokenError(
            f"Expected a decimal number at column {start + 1}{_where(line_number)}, "
            f"got '{_preview(text, start)}'.",
            line_number,
        )
    token = match.group(0)
    value = float(token)
    if math.isinf(value) and "inf" not in token.lower():
        raise TokenRangeError(
            f"Decimal token '{token}'{_where(line_number)} overflows a 64-bit float.",
            line_number,
        )
    if value == 0.0 and _has_nonzero_mantissa(token):
        raise TokenRangeError(
            f"Decimal token '{token}'{_where(line_number)} underflows a 64-bit float.",
            line_number,
        )
    return value, match.end()


def parse_int_token(
    text: str,
    cursor: int = 0,
    line_number: int | None = None,
) -> tuple[int, int]:
    """Parse one base-10 integer token starting at ``cursor``.

    Args:
        text: Line being parsed.
        cursor: Offset where scanning starts.
        line_number: Optional line number reported in errors.

    Returns:
        Pair of parsed value and offset just past the token.

    Raises:
        MalformedTokenError: If no integer token starts at the cursor.
        TokenRangeError: If the value does not fit a signed 32-bit int.
    """
    start = _skip_whitespace(text, cursor)
    match = _INT_TOKEN_PATTERN.match(text, start)
    if match is None:
        raise MalformedTokenError(
            f"Expected an integer at column {start + 1}{_where(line_number)}, "
            f"got '{_preview(text, start)}'.",
            line_number,
        )
    value = int(match.group(0))
    if not INT_TOKEN_MIN <= value <= INT_TOKEN_MAX:
        raise TokenRangeError(
            f"Integer token '{match.group(0)}'{_where(line_number)} does not fit "
            f"[{INT_TOKEN_MIN}, {INT_TOKEN_MAX}].",
            line_number,
        )
    return value, match.end()


def _skip_whitespace(text: str, cursor: int) -> int:
    whitespace = _WHITESPACE_PATTERN.match(text, cursor)
    return whitespace.end() if whitespace is not None else cursor


def _has_nonzero_mantissa(token: str) -> bool:
    mantissa = re.split(r"[eE]", token, maxsplit=1)[0]
    return _NONZERO_DIGIT_PATTERN.search(mantissa) is not None


def _where(line_number: int | None) -> str:
    return f" on line {line_number}" if line_number is not None else ""


def _preview(text: str, start: int) -> str:
    remainder = text[start:].strip()
    return remainder[:16] if remainder else "<end of line>"
