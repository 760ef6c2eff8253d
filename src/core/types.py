"""Shared typed models.

This module defines immutable data models used by the sample store
and both table codecs to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

TableFormat = Literal["binary", "text"]
InsertOutcome = Literal["inserted", "duplicate_recorded", "duplicate_discarded"]


@dataclass(frozen=True, order=True)
class Sample:
    """One observation of an input vector and its scalar output.

    Ordering is lexicographic over ``x`` and then ``y``; the store keeps
    samples in this order and every export follows it.

    Attributes:
        x: Input coordinates, one per dimension.
        y: Output value.
    """

    x: tuple[float, ...]
    y: float

    @classmethod
    def build(cls, x: float | Iterable[float], y: float) -> "Sample":
        """Create a sample from a scalar or any iterable of coordinates.

        Args:
            x: Input coordinates; a bare number is a one-dimensional input.
            y: Output value.

        Returns:
            Normalized immutable sample.
        """
        if isinstance(x, (int, float)):
            coordinates: tuple[float, ...] = (float(x),)
        else:
            coordinates = tuple(float(value) for value in x)
        return cls(x=coordinates, y=float(y))

    @property
    def dimensionality(self) -> int:
        """Number of input coordinates."""
        return len(self.x)


@dataclass(frozen=True)
class TableSummary:
    """Point-in-time counters describing a sample store.

    Attributes:
        sample_count: Stored samples, duplicates included.
        duplicate_count: Stored samples that repeat an earlier one.
        dimensionality: Input dimensionality, 0 before the first sample.
        required_count: Samples needed for a complete factorial grid.
        grid_complete: Whether the stored samples cover the grid.
    """

    sample_count: int
    duplicate_count: int
    dimensionality: int
    required_count: int
    grid_complete: bool
