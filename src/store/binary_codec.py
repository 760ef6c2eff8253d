"""Portable binary codec for sample tables.

Layout (version 1), no padding between fields:

    order_marker   u16  always little-endian; 0xFFFE little-endian producer,
                        0xFEFF big-endian producer
    word_width     u8   producer native unsigned int width (diagnostic)
    float_width    u8   producer float width, must be 8
    sample_count   u64  producer byte order
    input_dims     u64  producer byte order
    output_dims    u64  producer byte order, always 1
    complete       u8   grid completeness when saved

The header is followed by ``sample_count`` records of ``input_dims + 1``
float64 words in producer byte order. A reader on the other byte order
swaps every word of the body after reading it.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO

from core.byte_order import bits_to_float64, is_little_endian, swap64
from core.constants import (
    BIG_ENDIAN_ORDER_MARKER,
    BINARY_LAYOUT_VERSION,
    FLOAT_WIDTH_BYTES,
    LITTLE_ENDIAN_ORDER_MARKER,
    MAX_INPUT_DIMENSIONALITY,
    OUTPUT_DIMENSIONALITY,
)
from core.errors import (
    DimensionMismatchError,
    GridTableFormatError,
    InvalidOrderMarkerError,
    TruncatedHeaderError,
    UnsupportedFloatWidthError,
    UnsupportedOutputDimensionError,
)
from core.logging_config import get_logger

if TYPE_CHECKING:
    from store.sample_store import SampleStore

_LOGGER = get_logger(__name__)

NATIVE_WORD_WIDTH = struct.calcsize("I")


@dataclass(frozen=True)
class HeaderField:
    """One fixed-width header field.

    Attributes:
        name: Field name.
        code: ``struct`` format code.
        width: Encoded width in bytes.
    """

    name: str
    code: str
    width: int


@dataclass(frozen=True)
class BinaryLayout:
    """Versioned header layout description.

    Attributes:
        version: Layout version number.
        marker: Order-marker field, always encoded little-endian.
        fields: Remaining fields, encoded in the producer's byte order.
    """

    version: int
    marker: HeaderField
    fields: tuple[HeaderField, ...]

    @property
    def size(self) -> int:
        return self.marker.width + sum(field.width for field in self.fields)

    def marker_struct(self) -> struct.Struct:
        return struct.Struct("<" + self.marker.code)

    def fields_struct(self, little_endian: bool) -> struct.Struct:
        prefix = "<" if little_endian else ">"
        return struct.Struct(prefix + "".join(field.code for field in self.fields))


HEADER_LAYOUT = BinaryLayout(
    version=BINARY_LAYOUT_VERSION,
    marker=HeaderField("order_marker", "H", 2),
    fields=(
        HeaderField("word_width", "B", 1),
        HeaderField("float_width", "B", 1),
        HeaderField("sample_count", "Q", 8),
        HeaderField("input_dimensionality", "Q", 8),
        HeaderField("output_dimensionality", "Q", 8),
        HeaderField("complete", "B", 1),
    ),
)


@dataclass(frozen=True)
class BinaryHeader:
    """Decoded binary table header.

    Attributes:
        order_marker: Producer byte-order marker.
        word_width: Producer native unsigned int width in bytes.
        float_width: Producer float width in bytes.
        sample_count: Number of records that follow.
        input_dimensionality: Input coordinates per record.
        output_dimensionality: Outputs per record.
        complete: Whether the grid was complete when saved.
    """

    order_marker: int
    word_width: int
    float_width: int
    sample_count: int
    input_dimensionality: int
    output_dimensionality: int
    complete: bool

    @property
    def producer_little_endian(self) -> bool:
        return self.order_marker == LITTLE_ENDIAN_ORDER_MARKER

    @property
    def record_width(self) -> int:
        """Number of float64 words in one record."""
        return self.input_dimensionality + self.output_dimensionality


def order_marker_for(little_endian: bool) -> int:
    """Return the order marker written by a producer of the given byte order."""
    return LITTLE_ENDIAN_ORDER_MARKER if little_endian else BIG_ENDIAN_ORDER_MARKER


def pack_header(header: BinaryHeader) -> bytes:
    """Serialize a header with the version-1 layout.

    Args:
        header: Header to serialize.

    Returns:
        Encoded header bytes.
    """
    marker = HEADER_LAYOUT.marker_struct().pack(header.order_marker)
    fields = HEADER_LAYOUT.fields_struct(header.producer_little_endian).pack(
        header.word_width,
        header.float_width,
        header.sample_count,
        header.input_dimensionality,
        header.output_dimensionality,
        int(header.complete),
    )
    return marker + fields


def unpack_header(raw: bytes) -> BinaryHeader:
    """Decode a version-1 header.

    Args:
        raw: Bytes read from the start of a table file.

    Returns:
        Decoded header.

    Raises:
        TruncatedHeaderError: If fewer bytes than the header size are given.
        InvalidOrderMarkerError: If the order marker is not recognized.
    """
    if len(raw) < HEADER_LAYOUT.size:
        raise TruncatedHeaderError(
            f"Failed to read binary table header: expected {HEADER_LAYOUT.size} bytes, "
            f"got {len(raw)}. The file is empty or truncated."
        )
    marker_struct = HEADER_LAYOUT.marker_struct()
    (order_marker,) = marker_struct.unpack_from(raw, 0)
    if order_marker not in (LITTLE_ENDIAN_ORDER_MARKER, BIG_ENDIAN_ORDER_MARKER):
        raise InvalidOrderMarkerError(
            f"Invalid byte-order marker 0x{order_marker:04X}: expected "
            f"0x{LITTLE_ENDIAN_ORDER_MARKER:04X} or 0x{BIG_ENDIAN_ORDER_MARKER:04X}. "
            "The file is not a binary sample table."
        )
    little_endian = order_marker == LITTLE_ENDIAN_ORDER_MARKER
    (
        word_width,
        float_width,
        sample_count,
        input_dimensionality,
        output_dimensionality,
        complete,
    ) = HEADER_LAYOUT.fields_struct(little_endian).unpack_from(raw, marker_struct.size)
    return BinaryHeader(
        order_marker=order_marker,
        word_width=word_width,
        float_width=float_width,
        sample_count=sample_count,
        input_dimensionality=input_dimensionality,
        output_dimensionality=output_dimensionality,
        complete=bool(complete),
    )


def write_binary(
    table: SampleStore,
    stream: BinaryIO,
    producer_little_endian: bool | None = None,
) -> int:
    """Write a table as a header followed by raw float64 records.

    Args:
        table: Store to serialize.
        stream: Writable binary stream.
        producer_little_endian: Byte order to write; native when omitted.

    Returns:
        Number of records written.

    Raises:
        IncompleteGridError: If the grid is incomplete and that is not allowed.
    """
    samples = tuple(table.iter_samples())
    little_endian = is_little_endian() if producer_little_endian is None else producer_little_endian
    dimensionality = table.get_num_variables()
    header = BinaryHeader(
        order_marker=order_marker_for(little_endian),
        word_width=NATIVE_WORD_WIDTH,
        float_width=FLOAT_WIDTH_BYTES,
        sample_count=len(samples),
        input_dimensionality=dimensionality,
        output_dimensionality=OUTPUT_DIMENSIONALITY,
        complete=table.is_grid_complete(),
    )
    stream.write(pack_header(header))
    record_struct = struct.Struct(
        ("<" if little_endian else ">") + f"{header.record_width}d"
    )
    for sample in samples:
        stream.write(record_struct.pack(*sample.x, sample.y))
    return len(samples)


def read_binary(table: SampleStore, stream: BinaryIO) -> int:
    """Read a binary table into ``table`` through its normal insertion path.

    Reading stops early, with a ``binary_body_truncated`` warning, when
    the stream ends before ``sample_count`` full records were read.

    Args:
        table: Store receiving the samples.
        stream: Readable binary stream positioned at the header.

    Returns:
        Number of records read.

    Raises:
        TruncatedHeaderError: If the stream ends inside the header.
        InvalidOrderMarkerError: If the order marker is not recognized.
        UnsupportedFloatWidthError: If the producer used another float width.
        UnsupportedOutputDimensionError: If records carry more than one output.
        GridTableFormatError: If the header declares an impossible record shape.
        DimensionMismatchError: If the table already holds other-dimensional samples.
    """
    header = unpack_header(stream.read(HEADER_LAYOUT.size))
    _validate_header(table, header)
    needs_byte_swap = is_little_endian() != header.producer_little_endian
    _LOGGER.debug(
        "binary_header_read",
        order_marker=f"0x{header.order_marker:04X}",
        word_width=header.word_width,
        float_width=header.float_width,
        sample_count=header.sample_count,
        input_dimensionality=header.input_dimensionality,
        complete=header.complete,
        needs_byte_swap=needs_byte_swap,
    )

    if header.sample_count == 0:
        return 0

    dimensionality = header.input_dimensionality
    word_struct = struct.Struct(f"={header.record_width}Q")
    float_struct = struct.Struct(f"={header.record_width}d")
    buffer = bytearray(word_struct.size)
    loaded = 0
    while loaded < header.sample_count:
        if stream.readinto(buffer) != len(buffer):
            _LOGGER.warning(
                "binary_body_truncated",
                expected=header.sample_count,
                loaded=loaded,
            )
            break
        if needs_byte_swap:
            values = tuple(bits_to_float64(swap64(word)) for word in word_struct.unpack(buffer))
        else:
            values = float_struct.unpack(buffer)
        table.add_sample(values[:dimensionality], values[dimensionality])
        loaded += 1
    return loaded


def _validate_header(table: SampleStore, header: BinaryHeader) -> None:
    if header.float_width != FLOAT_WIDTH_BYTES:
        raise UnsupportedFloatWidthError(
            f"Unsupported float width {header.float_width}: this reader only handles "
            f"{FLOAT_WIDTH_BYTES}-byte floats and does not convert between widths."
        )
    if header.output_dimensionality != OUTPUT_DIMENSIONALITY:
        raise UnsupportedOutputDimensionError(
            f"Unsupported output dimensionality {header.output_dimensionality}: "
            f"records must carry exactly {OUTPUT_DIMENSIONALITY} output."
        )
    if header.input_dimensionality > MAX_INPUT_DIMENSIONALITY:
        raise GridTableFormatError(
            f"Binary header declares {header.input_dimensionality} input dimensions; "
            f"at most {MAX_INPUT_DIMENSIONALITY} are supported. The header is corrupt."
        )
    if header.input_dimensionality == 0 and header.sample_count > 0:
        raise GridTableFormatError(
            f"Binary header declares {header.sample_count} samples without input dimensions."
        )
    current = table.get_num_variables()
    if current and header.input_dimensionality and current != header.input_dimensionality:
        raise DimensionMismatchError(
            f"File holds {header.input_dimensionality}-dimensional samples but the table "
            f"holds {current}-dimensional samples."
        )
