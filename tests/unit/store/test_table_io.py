"""Unit tests for table file persistence."""

from __future__ import annotations

import locale

import pytest
from structlog.testing import capture_logs

from core.errors import (
    GridTableFormatError,
    GridTableIOError,
    IncompleteGridError,
    InvalidOrderMarkerError,
    MalformedTokenError,
    TruncatedHeaderError,
    UnknownFormatError,
)
from store.sample_store import SampleStore
from store.table_io import resolve_table_format


def _grid_store(**kwargs) -> SampleStore:
    store = SampleStore(**kwargs)
    for x0 in (0.0, 0.5, 1.0):
        for x1 in (-1.0, 1.0):
            store.add_sample([x0, x1], x0 * 10 + x1)
    return store


@pytest.mark.parametrize("table_format", ["binary", "text"])
def test_save_then_load_reproduces_table(tmp_path, table_format: str) -> None:
    """Both formats should reproduce columns and outputs in order."""
    path = tmp_path / f"grid.{table_format}"
    source = _grid_store()
    source.save(path, table_format)
    target = SampleStore()

    loaded = target.load(path, table_format)

    assert loaded == 6
    assert target.export_columns() == source.export_columns()
    assert target.export_outputs() == source.export_outputs()


def test_save_uses_store_default_format(tmp_path) -> None:
    """Omitting the format should use the store's configured default."""
    path = tmp_path / "grid.txt"
    source = _grid_store(default_format="text")

    source.save(path)

    assert path.read_text(encoding="ascii").startswith("# Saved sample table")


def test_save_and_load_log_structured_events(tmp_path) -> None:
    """Persistence should emit saved and loaded events with counters."""
    path = tmp_path / "grid.bin"

    with capture_logs() as captured:
        _grid_store().save(path)
        SampleStore().load(path)

    events = {entry["event"]: entry for entry in captured}
    assert events["table_saved"]["sample_count"] == 6
    assert events["table_loaded"]["grid_complete"] is True


def test_save_refuses_incomplete_grid_without_touching_file(tmp_path) -> None:
    """A refused save should not create or truncate the target file."""
    path = tmp_path / "partial.bin"
    store = SampleStore()
    store.add_sample([0, 0], 1)
    store.add_sample([1, 1], 4)

    with pytest.raises(IncompleteGridError):
        store.save(path)

    assert not path.exists()


def test_save_raises_io_error_for_missing_directory(tmp_path) -> None:
    """Unwritable destinations should surface as IO errors."""
    with pytest.raises(GridTableIOError):
        _grid_store().save(tmp_path / "missing" / "grid.bin")


def test_load_raises_io_error_for_missing_file(tmp_path) -> None:
    """Missing files should surface as IO errors."""
    with pytest.raises(GridTableIOError):
        SampleStore().load(tmp_path / "absent.bin")


def test_load_raises_truncated_header_for_empty_file(tmp_path) -> None:
    """An empty binary file should be a fatal truncated-header error."""
    path = tmp_path / "empty.bin"
    path.write_bytes(b"")

    with pytest.raises(TruncatedHeaderError) as excinfo:
        SampleStore().load(path, "binary")

    assert isinstance(excinfo.value, GridTableIOError)


def test_load_raises_for_text_file_read_as_binary(tmp_path) -> None:
    """A text table read as binary should fail on the order marker."""
    path = tmp_path / "grid.txt"
    _grid_store().save(path, "text")

    with pytest.raises(InvalidOrderMarkerError):
        SampleStore().load(path, "binary")


def test_load_raises_format_error_for_undecodable_text(tmp_path) -> None:
    """Text tables that are not UTF-8 should be a format error."""
    path = tmp_path / "grid.txt"
    path.write_bytes(b"1 1\n\xff\xfe 1\n")

    with pytest.raises(GridTableFormatError):
        SampleStore().load(path, "text")


def test_failed_load_restores_numeric_locale(tmp_path) -> None:
    """A parse failure should still restore the numeric locale."""
    path = tmp_path / "bad.txt"
    path.write_text("1 1\nnot-a-number 1\n", encoding="ascii")
    before = locale.setlocale(locale.LC_NUMERIC)

    with pytest.raises(MalformedTokenError):
        SampleStore().load(path, "text")

    assert locale.setlocale(locale.LC_NUMERIC) == before


def test_unknown_format_is_rejected(tmp_path) -> None:
    """Unsupported format names should raise before any IO."""
    with pytest.raises(UnknownFormatError):
        _grid_store().save(tmp_path / "grid.csv", "csv")


def test_resolve_table_format_normalizes_case() -> None:
    """Format names should be case and whitespace insensitive."""
    assert resolve_table_format(" BINARY ") == "binary"
