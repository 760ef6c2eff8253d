"""Integration tests for sample table persistence workflows."""

from __future__ import annotations

from dataclasses import replace

from core.config import GridTableConfig
from gridtable import SampleStore


def test_binary_round_trip_of_two_by_two_grid(tmp_path, two_by_two_samples) -> None:
    """A saved and reloaded 2x2 grid should export sorted columns and outputs."""
    path = tmp_path / "grid.bin"
    source = SampleStore()
    for x, y in two_by_two_samples:
        source.add_sample(x, y)
    source.save(path, "binary")
    target = SampleStore()

    target.load(path, "binary")

    assert target.is_grid_complete() and target.get_num_samples_required() == 4
    assert target.export_columns() == [[0, 0, 1, 1], [0, 1, 0, 1]]
    assert target.export_outputs() == [1, 2, 3, 4]


def test_binary_to_text_conversion_preserves_duplicates(tmp_path) -> None:
    """Duplicates kept by a lenient store should survive both formats."""
    config = replace(GridTableConfig(), allow_duplicates=True)
    source = SampleStore.from_config(config)
    for x0 in (0.0, 0.25, 0.5):
        source.add_sample([x0], x0 * x0)
    source.add_sample([0.25], 0.0625)
    binary_path = source.save(tmp_path / "grid.bin", "binary")
    middle = SampleStore.from_config(config)
    middle.load(binary_path, "binary")
    text_path = middle.save(tmp_path / "grid.txt", "text")
    target = SampleStore.from_config(config)

    target.load(text_path, "text")

    assert target.get_num_duplicates() == 1 and target.get_num_samples() == 4
    assert target.export_outputs() == [0.0, 0.0625, 0.0625, 0.25]


def test_loading_into_strict_store_discards_duplicates(tmp_path) -> None:
    """A strict store should drop duplicate records while loading."""
    source = SampleStore(allow_duplicates=True)
    source.add_sample([1.0], 2.0)
    source.add_sample([1.0], 2.0)
    path = source.save(tmp_path / "dupes.bin")
    target = SampleStore()

    loaded = target.load(path)

    assert loaded == 2 and target.get_num_samples() == 1
