"""File persistence for sample tables.

This module owns format selection, file handles, and the numeric
locale pin around both codecs. Every handle and locale override is
scoped so it is released on success and on failure alike.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from core.constants import BINARY_FORMAT, SUPPORTED_FORMATS
from core.errors import GridTableFormatError, GridTableIOError, UnknownFormatError
from core.logging_config import get_logger
from core.numeric_locale import pinned_numeric_locale
from store.binary_codec import read_binary, write_binary
from store.text_codec import read_text, write_text

if TYPE_CHECKING:
    from store.sample_store import SampleStore

_LOGGER = get_logger(__name__)


def resolve_table_format(table_format: str) -> str:
    """Normalize and validate a serialization format name.

    Args:
        table_format: Format name such as ``binary`` or ``text``.

    Returns:
        Normalized format name.

    Raises:
        UnknownFormatError: If the format is not supported.
    """
    normalized = table_format.strip().lower()
    if normalized not in SUPPORTED_FORMATS:
        raise UnknownFormatError(
            f"Unsupported table format '{table_format}': expected one of "
            f"{', '.join(SUPPORTED_FORMATS)}."
        )
    return normalized


def save_table(table: SampleStore, path: Path, table_format: str, text_precision: int) -> Path:
    """Write a table to ``path`` in the requested format.

    The completeness guard runs before the file is opened, so a refused
    save leaves any existing file untouched.

    Args:
        table: Store to persist.
        path: Output file path.
        table_format: ``binary`` or ``text``.
        text_precision: Significant digits for the text format.

    Returns:
        Written file path.

    Raises:
        IncompleteGridError: If the grid is incomplete and that is not allowed.
        UnknownFormatError: If the format is not supported.
        GridTableIOError: If the file cannot be written.
    """
    resolved_format = resolve_table_format(table_format)
    table.require_complete_grid("save table")
    with pinned_numeric_locale():
        try:
            if resolved_format == BINARY_FORMAT:
                with path.open("wb") as binary_handle:
                    written = write_binary(table, binary_handle)
            else:
                with path.open("w", encoding="ascii", newline="\n") as text_handle:
                    written = write_text(table, text_handle, text_precision)
        except OSError as error:
            raise GridTableIOError(
                f"Failed to write sample table to {path}: {error}. "
                "Check write permissions and available disk space."
            ) from error
    _LOGGER.info(
        "table_saved",
        path=str(path),
        format=resolved_format,
        sample_count=written,
        grid_complete=table.is_grid_complete(),
    )
    return path


def load_table(table: SampleStore, path: Path, table_format: str) -> int:
    """Read a table file into ``table``.

    Args:
        table: Store receiving the samples.
        path: Input file path.
        table_format: ``binary`` or ``text``.

    Returns:
        Number of records read.

    Raises:
        UnknownFormatError: If the format is not supported.
        GridTableIOError: If the file cannot be opened or read.
        GridTableFormatError: If the file content is invalid.
    """
    resolved_format = resolve_table_format(table_format)
    with pinned_numeric_locale():
        try:
            if resolved_format == BINARY_FORMAT:
                with path.open("rb") as binary_handle:
                    loaded = read_binary(table, binary_handle)
            else:
                with path.open("r", encoding="utf-8") as text_handle:
                    loaded = read_text(table, text_handle)
        except OSError as error:
            raise GridTableIOError(
                f"Failed to read sample table from {path}: {error}. "
                "Check that the file exists and is readable."
            ) from error
        except UnicodeDecodeError as error:
            raise GridTableFormatError(
                f"Failed to decode text sample table {path}: {error.reason}. "
                "Text tables must be ASCII or UTF-8."
            ) from error
    _LOGGER.info(
        "table_loaded",
        path=str(path),
        format=resolved_format,
        sample_count=loaded,
        grid_complete=table.is_grid_complete(),
    )
    return loaded
