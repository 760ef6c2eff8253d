"""Factorial grid completeness checks.

A sample set is treated as a dense Cartesian design: it is complete when
the number of distinct samples equals the product of the distinct values
observed on each axis. Scattered point clouds never report complete.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from core.errors import IncompleteGridError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def required_sample_count(unique_counts: Sequence[int]) -> int:
    """Return how many distinct samples a complete grid needs.

    Args:
        unique_counts: Distinct coordinate count for each dimension.

    Returns:
        Product of the counts, or 0 when no dimension is known.
    """
    if not unique_counts:
        return 0
    return math.prod(unique_counts)


def is_grid_complete(
    sample_count: int,
    duplicate_count: int,
    unique_counts: Sequence[int],
) -> bool:
    """Return whether stored samples cover every grid combination.

    Args:
        sample_count: Stored samples including duplicates.
        duplicate_count: Stored samples that repeat an earlier one.
        unique_counts: Distinct coordinate count for each dimension.

    Returns:
        ``True`` when the distinct samples fill the factorial grid.
    """
    return sample_count > 0 and sample_count - duplicate_count == required_sample_count(
        unique_counts
    )


@dataclass(frozen=True)
class GridCompletenessPolicy:
    """Decides whether exports may run on the current sample set.

    Attributes:
        allow_incomplete_grid: Let exports proceed on a partial grid.
    """

    allow_incomplete_grid: bool = False

    def require_complete(
        self,
        sample_count: int,
        duplicate_count: int,
        unique_counts: Sequence[int],
        operation: str,
    ) -> None:
        """Refuse ``operation`` when the grid is incomplete and that is not allowed.

        Args:
            sample_count: Stored samples including duplicates.
            duplicate_count: Stored samples that repeat an earlier one.
            unique_counts: Distinct coordinate count for each dimension.
            operation: Name of the export being guarded, for diagnostics.

        Raises:
            IncompleteGridError: If the grid is incomplete and not allowed to be.
        """
        if self.allow_incomplete_grid:
            return
        if is_grid_complete(sample_count, duplicate_count, unique_counts):
            return
        required_count = required_sample_count(unique_counts)
        distinct_count = sample_count - duplicate_count
        _LOGGER.error(
            "grid_incomplete",
            operation=operation,
            sample_count=sample_count,
            distinct_count=distinct_count,
            required_count=required_count,
        )
        raise IncompleteGridError(
            f"Cannot {operation}: the grid is not complete "
            f"({distinct_count} distinct samples, {required_count} required). "
            "Add the missing grid points or allow incomplete grids."
        )
