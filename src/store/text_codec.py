"""Human-readable text codec for sample tables.

The text layout is a block of ``#`` comment lines, one ``<D> 1`` line
giving the input and output dimensionality, and then one line per
sample holding ``D + 1`` space-separated numbers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, TextIO

from core.constants import (
    OUTPUT_DIMENSIONALITY,
    TEXT_COMMENT_PREFIX,
    TEXT_TITLE_LINE,
)
from core.errors import (
    DimensionMismatchError,
    GridTableFormatError,
    UnsupportedOutputDimensionError,
)
from core.numeric_parsing import parse_float_token, parse_int_token

if TYPE_CHECKING:
    from store.sample_store import SampleStore


def format_value(value: float, precision: int) -> str:
    """Format one number with ``precision`` significant digits."""
    return format(value, f".{precision}g")


def write_text(table: SampleStore, stream: TextIO, precision: int) -> int:
    """Write a table in the line-oriented text layout.

    Args:
        table: Store to serialize.
        stream: Writable text stream.
        precision: Significant digits per number.

    Returns:
        Number of sample lines written.

    Raises:
        IncompleteGridError: If the grid is incomplete and that is not allowed.
    """
    samples = tuple(table.iter_samples())
    dimensionality = table.get_num_variables()
    stream.write(f"{TEXT_TITLE_LINE}\n")
    stream.write(f"{TEXT_COMMENT_PREFIX} Number of samples: {len(samples)}\n")
    stream.write(
        f"{TEXT_COMMENT_PREFIX} Complete grid: {'yes' if table.is_grid_complete() else 'no'}\n"
    )
    stream.write(f"{TEXT_COMMENT_PREFIX} xDim: {dimensionality}\n")
    stream.write(f"{dimensionality} {OUTPUT_DIMENSIONALITY}\n")
    for sample in samples:
        values = (*sample.x, sample.y)
        stream.write(" ".join(format_value(value, precision) for value in values) + "\n")
    return len(samples)


def read_text(table: SampleStore, lines: Iterable[str]) -> int:
    """Read a text table into ``table`` through its normal insertion path.

    Args:
        table: Store receiving the samples.
        lines: Text lines, typically an open text file.

    Returns:
        Number of sample lines read.

    Raises:
        MalformedTokenError: If a token is not a valid number.
        TokenRangeError: If a token does not fit its numeric type.
        UnsupportedOutputDimensionError: If the file declares more than one output.
        DimensionMismatchError: If the table already holds other-dimensional samples.
    """
    input_dimensionality: int | None = None
    loaded = 0
    for line_number, raw_line in enumerate(lines, 1):
        line = raw_line.rstrip("\r\n")
        if line.startswith(TEXT_COMMENT_PREFIX) or not line.strip():
            continue
        if input_dimensionality is None:
            input_dimensionality = _parse_dimensions(table, line, line_number)
            continue
        x, y = _parse_sample_line(line, line_number, input_dimensionality)
        table.add_sample(x, y)
        loaded += 1
    return loaded


def _parse_dimensions(table: SampleStore, line: str, line_number: int) -> int:
    input_dimensionality, cursor = parse_int_token(line, 0, line_number)
    output_dimensionality, _ = parse_int_token(line, cursor, line_number)
    if input_dimensionality < 1:
        raise GridTableFormatError(
            f"Invalid input dimensionality {input_dimensionality} on line {line_number}: "
            "expected at least 1."
        )
    if output_dimensionality != OUTPUT_DIMENSIONALITY:
        raise UnsupportedOutputDimensionError(
            f"Unsupported output dimensionality {output_dimensionality} on line "
            f"{line_number}: expected {OUTPUT_DIMENSIONALITY}."
        )
    current = table.get_num_variables()
    if current and current != input_dimensionality:
        raise DimensionMismatchError(
            f"File holds {input_dimensionality}-dimensional samples but the table "
            f"holds {current}-dimensional samples."
        )
    return input_dimensionality


def _parse_sample_line(
    line: str,
    line_number: int,
    input_dimensionality: int,
) -> tuple[list[float], float]:
    x: list[float] = []
    cursor = 0
    for _ in range(input_dimensionality):
        value, cursor = parse_float_token(line, cursor, line_number)
        x.append(value)
    y, _ = parse_float_token(line, cursor, line_number)
    return x, y
