"""Unit tests for byte-order helpers."""

from __future__ import annotations

import struct
import sys

import pytest

from core.byte_order import (
    bits_to_float64,
    is_little_endian,
    swap16,
    swap32,
    swap64,
    swap_bytes,
)


def test_is_little_endian_matches_interpreter() -> None:
    """Detection should agree with the interpreter byte order."""
    assert is_little_endian() == (sys.byteorder == "little")


@pytest.mark.parametrize(
    ("value", "width", "expected"),
    [
        (0x1234, 2, 0x3412),
        (0xFFFE, 2, 0xFEFF),
        (0x12345678, 4, 0x78563412),
        (0x000000FF, 4, 0xFF000000),
        (0x0102030405060708, 8, 0x0807060504030201),
        (0xFF00000000000000, 8, 0x00000000000000FF),
    ],
)
def test_swap_bytes_reverses_each_width(value: int, width: int, expected: int) -> None:
    """Swapping should reverse bytes for 2, 4, and 8-byte words."""
    assert swap_bytes(value, width) == expected


@pytest.mark.parametrize(
    ("swap", "width"),
    [(swap16, 2), (swap32, 4), (swap64, 8)],
)
def test_swap_matches_reversed_byte_representation(swap, width: int) -> None:
    """Each swap should equal reading the word's bytes in reverse."""
    value = int.from_bytes(bytes(range(0xA1, 0xA1 + width)), "big")

    swapped = swap(value)

    assert swapped == int.from_bytes(value.to_bytes(width, "little"), "big")
    assert swap(swapped) == value


def test_swap_bytes_rejects_unsupported_width() -> None:
    """Only 2, 4, and 8-byte words can be swapped."""
    with pytest.raises(ValueError, match="width 3"):
        swap_bytes(0x123456, 3)


def test_swapped_word_reinterprets_as_foreign_double() -> None:
    """Swapping a foreign-order double's word should recover the value."""
    value = 1234.5678
    foreign_prefix = ">" if is_little_endian() else "<"
    (foreign_word,) = struct.unpack("=Q", struct.pack(foreign_prefix + "d", value))

    assert bits_to_float64(swap64(foreign_word)) == value


def test_bits_to_float64_reads_ieee_pattern() -> None:
    """Known bit patterns should map to their doubles."""
    assert bits_to_float64(0x3FF0000000000000) == 1.0
    assert bits_to_float64(0xC000000000000000) == -2.0
