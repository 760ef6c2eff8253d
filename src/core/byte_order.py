"""Byte-order detection and fixed-width byte swapping.

The swap helpers reverse 2, 4, and 8-byte unsigned words with
mask-and-shift steps, and the float helper reinterprets swapped
words back into doubles through their 64-bit pattern.
"""

from __future__ import annotations

import struct
import sys
from typing import Callable

_MASK16 = 0xFFFF
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def is_little_endian() -> bool:
    """Return whether the running interpreter is little-endian."""
    return sys.byteorder == "little"


def swap16(value: int) -> int:
    """Reverse the byte order of a 16-bit word."""
    value &= _MASK16
    return ((value << 8) | (value >> 8)) & _MASK16


def swap32(value: int) -> int:
    """Reverse the byte order of a 32-bit word."""
    value &= _MASK32
    value = ((value << 8) & 0xFF00FF00) | ((value >> 8) & 0x00FF00FF)
    return ((value << 16) | (value >> 16)) & _MASK32


def swap64(value: int) -> int:
    """Reverse the byte order of a 64-bit word."""
    value &= _MASK64
    value = ((value << 8) & 0xFF00FF00FF00FF00) | ((value >> 8) & 0x00FF00FF00FF00FF)
    value = ((value << 16) & 0xFFFF0000FFFF0000) | ((value >> 16) & 0x0000FFFF0000FFFF)
    return ((value << 32) | (value >> 32)) & _MASK64


_SWAPS_BY_WIDTH: dict[int, Callable[[int], int]] = {
    2: swap16,
    4: swap32,
    8: swap64,
}


def swap_bytes(value: int, width: int) -> int:
    """Reverse the byte order of an unsigned word of the given width.

    Args:
        value: Unsigned integer word.
        width: Word width in bytes (2, 4, or 8).

    Returns:
        Word with reversed byte order.

    Raises:
        ValueError: If width is not a supported word width.
    """
    swap = _SWAPS_BY_WIDTH.get(width)
    if swap is None:
        raise ValueError(
            f"Unsupported byte-swap width {width}: expected one of "
            f"{', '.join(str(key) for key in sorted(_SWAPS_BY_WIDTH))}."
        )
    return swap(value)


def bits_to_float64(bits: int) -> float:
    """Return the double whose IEEE-754 bit pattern is ``bits``."""
    return struct.unpack("=d", struct.pack("=Q", bits & _MASK64))[0]
