"""Pytest configuration and shared fixtures for gridtable tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if str(_SRC_PATH) not in sys.path:
    sys.path.insert(0, str(_SRC_PATH))


@pytest.fixture
def two_by_two_samples() -> list[tuple[list[float], float]]:
    """Return the corners of a 2x2 grid in unsorted insertion order."""
    return [([1.0, 1.0], 4.0), ([0.0, 0.0], 1.0), ([1.0, 0.0], 3.0), ([0.0, 1.0], 2.0)]
