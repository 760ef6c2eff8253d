"""Per-dimension index of observed grid coordinates."""

from __future__ import annotations

from typing import Sequence


class GridIndex:
    """Unique input coordinates observed so far, one set per dimension."""

    def __init__(self) -> None:
        self._axes: list[set[float]] = []

    @property
    def dimensionality(self) -> int:
        """Number of indexed dimensions, 0 before initialization."""
        return len(self._axes)

    def initialize(self, dimensionality: int) -> None:
        """Create one empty axis per input dimension.

        Args:
            dimensionality: Input dimensionality of the owning store.
        """
        self._axes = [set() for _ in range(dimensionality)]

    def record(self, x: Sequence[float]) -> None:
        """Record every coordinate of an input vector.

        Args:
            x: Input vector matching the indexed dimensionality.
        """
        for axis, value in zip(self._axes, x):
            axis.add(value)

    def unique_counts(self) -> tuple[int, ...]:
        """Return the number of distinct values seen on each axis."""
        return tuple(len(axis) for axis in self._axes)

    def values(self, dimension: int) -> tuple[float, ...]:
        """Return the sorted distinct values seen on one axis.

        Args:
            dimension: Zero-based dimension index.

        Returns:
            Ascending unique coordinates.

        Raises:
            IndexError: If the dimension is not indexed.
        """
        return tuple(sorted(self._axes[dimension]))
