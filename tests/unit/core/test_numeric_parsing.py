"""Unit tests for checked numeric token parsing."""

from __future__ import annotations

import math

import pytest

from core.errors import MalformedTokenError, TokenRangeError
from core.numeric_parsing import parse_float_token, parse_int_token


def test_parse_float_token_advances_cursor_through_line() -> None:
    """Sequential parses should walk a line token by token."""
    line = "0.5 -2e3  7"

    first, cursor = parse_float_token(line)
    second, cursor = parse_float_token(line, cursor)
    third, cursor = parse_float_token(line, cursor)

    assert (first, second, third) == (0.5, -2000.0, 7.0)
    assert cursor == len(line)


def test_parse_float_token_accepts_special_values() -> None:
    """Infinity and NaN spellings should parse like C strtod."""
    value_inf, cursor = parse_float_token("-inf nan")
    value_nan, _ = parse_float_token("-inf nan", cursor)

    assert value_inf == -math.inf and math.isnan(value_nan)


def test_parse_float_token_stops_at_trailing_garbage() -> None:
    """A number followed by letters should parse up to the letters."""
    value, cursor = parse_float_token("1.25abc")

    assert (value, cursor) == (1.25, 4)


def test_parse_float_token_raises_for_malformed_token() -> None:
    """Non-numeric tokens should fail with a malformed-token error."""
    with pytest.raises(MalformedTokenError) as excinfo:
        parse_float_token("1.0 oops", 3, line_number=7)

    assert excinfo.value.line_number == 7


def test_parse_float_token_raises_at_end_of_line() -> None:
    """A missing token should be reported as malformed."""
    with pytest.raises(MalformedTokenError, match="end of line"):
        parse_float_token("1.0   ", 3)


def test_parse_float_token_raises_for_overflow() -> None:
    """Finite literals too large for a double should be out of range."""
    with pytest.raises(TokenRangeError, match="overflows"):
        parse_float_token("1e400")


def test_parse_float_token_raises_for_underflow() -> None:
    """Nonzero literals that round to zero should be out of range."""
    with pytest.raises(TokenRangeError, match="underflows"):
        parse_float_token("1e-400")


def test_parse_float_token_accepts_explicit_zero() -> None:
    """Zero literals with exponents are not an underflow."""
    value, _ = parse_float_token("0.000e-400")

    assert value == 0.0


def test_parse_int_token_reads_two_integers() -> None:
    """Integer parsing should return values and advance the cursor."""
    first, cursor = parse_int_token("3 1")
    second, _ = parse_int_token("3 1", cursor)

    assert (first, second) == (3, 1)


def test_parse_int_token_raises_for_malformed_token() -> None:
    """Non-integer tokens should fail with a malformed-token error."""
    with pytest.raises(MalformedTokenError):
        parse_int_token("x 1")


def test_parse_int_token_raises_for_out_of_range_value() -> None:
    """Values outside a 32-bit int should be out of range."""
    with pytest.raises(TokenRangeError):
        parse_int_token("4294967296 1")


@pytest.mark.parametrize("parse", [parse_float_token, parse_int_token])
def test_non_ascii_digits_are_malformed(parse) -> None:
    """Only ASCII digits should count, as in the C numeric convention."""
    with pytest.raises(MalformedTokenError):
        parse("٣ 4")
