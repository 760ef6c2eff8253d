"""Sample store for factorial grid data.

This module keeps samples sorted by input vector and output value,
tracks duplicates, and maintains the grid index used to decide whether
the stored samples form a complete factorial grid. Exports refuse to
run on an incomplete grid unless the store was built to allow it.
"""

from __future__ import annotations

import bisect
from pathlib import Path
from typing import Iterable, Iterator

from core.config import GridTableConfig
from core.constants import DEFAULT_FORMAT, DEFAULT_TEXT_PRECISION
from core.errors import DimensionMismatchError, GridContractError
from core.logging_config import get_logger
from core.types import InsertOutcome, Sample, TableSummary
from store.completeness import GridCompletenessPolicy, is_grid_complete, required_sample_count
from store.grid_index import GridIndex
from store.table_io import load_table, save_table

_LOGGER = get_logger(__name__)


class SampleStore:
    """Ordered, duplicate-aware collection of grid samples.

    Policy flags are fixed at construction. The store only grows:
    samples are added one at a time, or in bulk through ``load``.
    """

    def __init__(
        self,
        allow_duplicates: bool = False,
        allow_incomplete_grid: bool = False,
        text_precision: int = DEFAULT_TEXT_PRECISION,
        default_format: str = DEFAULT_FORMAT,
    ) -> None:
        """Create an empty store.

        Args:
            allow_duplicates: Keep repeated samples and count them.
            allow_incomplete_grid: Let exports run on a partial grid.
            text_precision: Significant digits used by text saves.
            default_format: Format used when save/load get none.
        """
        self._allow_duplicates = allow_duplicates
        self._policy = GridCompletenessPolicy(allow_incomplete_grid=allow_incomplete_grid)
        self._text_precision = text_precision
        self._default_format = default_format
        self._samples: list[Sample] = []
        self._distinct: set[Sample] = set()
        self._duplicate_count = 0
        self._dimensionality = 0
        self._grid = GridIndex()

    @classmethod
    def from_config(cls, config: GridTableConfig | None = None) -> "SampleStore":
        """Create an empty store using configured policy and IO defaults.

        Args:
            config: Optional runtime configuration; read from env when omitted.

        Returns:
            Empty sample store.
        """
        config = config or GridTableConfig.from_env()
        return cls(
            allow_duplicates=config.allow_duplicates,
            allow_incomplete_grid=config.allow_incomplete_grid,
            text_precision=config.text_precision,
            default_format=config.default_format,
        )

    @property
    def allow_duplicates(self) -> bool:
        return self._allow_duplicates

    @property
    def allow_incomplete_grid(self) -> bool:
        return self._policy.allow_incomplete_grid

    def add_sample(self, x: float | Iterable[float], y: float) -> InsertOutcome:
        """Add one observation to the store.

        Args:
            x: Input coordinates; a bare number is a one-dimensional input.
            y: Output value.

        Returns:
            What happened to the sample.

        Raises:
            GridContractError: If the input vector is empty.
            DimensionMismatchError: If the input length differs from the store's.
        """
        return self.add(Sample.build(x, y))

    def add(self, sample: Sample) -> InsertOutcome:
        """Add a prepared sample to the store.

        An identical sample already in the store is discarded with a
        ``duplicate_sample_discarded`` event unless duplicates are allowed,
        in which case it is kept and counted.

        Args:
            sample: Sample to insert.

        Returns:
            What happened to the sample.

        Raises:
            GridContractError: If the input vector is empty.
            DimensionMismatchError: If the input length differs from the store's.
        """
        self._check_dimensionality(sample)
        if not self._samples:
            self._dimensionality = sample.dimensionality
            self._grid.initialize(self._dimensionality)

        outcome: InsertOutcome = "inserted"
        if sample in self._distinct:
            if not self._allow_duplicates:
                _LOGGER.warning(
                    "duplicate_sample_discarded",
                    x=list(sample.x),
                    y=sample.y,
                    hint="Create the store with allow_duplicates=True to keep duplicates.",
                )
                return "duplicate_discarded"
            self._duplicate_count += 1
            outcome = "duplicate_recorded"
            _LOGGER.debug("duplicate_sample_recorded", duplicate_count=self._duplicate_count)

        bisect.insort_right(self._samples, sample)
        self._distinct.add(sample)
        self._grid.record(sample.x)
        return outcome

    def get_num_samples(self) -> int:
        """Return stored samples, duplicates included."""
        return len(self._samples)

    def get_num_variables(self) -> int:
        """Return input dimensionality, 0 before the first sample."""
        return self._dimensionality

    def get_num_duplicates(self) -> int:
        return self._duplicate_count

    def get_num_samples_required(self) -> int:
        """Return the distinct samples a complete grid needs."""
        return required_sample_count(self._grid.unique_counts())

    def is_grid_complete(self) -> bool:
        """Return whether the distinct samples fill the factorial grid."""
        return is_grid_complete(
            len(self._samples), self._duplicate_count, self._grid.unique_counts()
        )

    def require_complete_grid(self, operation: str = "export samples") -> None:
        """Abort ``operation`` unless the grid is complete or allowed to be partial.

        Args:
            operation: Name of the guarded operation, for diagnostics.

        Raises:
            IncompleteGridError: If the grid is incomplete and that is not allowed.
        """
        self._policy.require_complete(
            len(self._samples),
            self._duplicate_count,
            self._grid.unique_counts(),
            operation,
        )

    def iter_samples(self) -> Iterator[Sample]:
        """Iterate samples in storage order after the completeness guard.

        Raises:
            IncompleteGridError: If the grid is incomplete and that is not allowed.
        """
        self.require_complete_grid("iterate samples")
        return iter(tuple(self._samples))

    def export_columns(self) -> list[list[float]]:
        """Return input coordinates grouped by dimension.

        ``columns[i][j]`` is the value of dimension ``i`` in the ``j``-th
        sample of storage order.

        Raises:
            IncompleteGridError: If the grid is incomplete and that is not allowed.
        """
        self.require_complete_grid("export columns")
        columns: list[list[float]] = [[] for _ in range(self._dimensionality)]
        for sample in self._samples:
            for column, value in zip(columns, sample.x):
                column.append(value)
        return columns

    def export_outputs(self) -> list[float]:
        """Return output values in storage order.

        Raises:
            IncompleteGridError: If the grid is incomplete and that is not allowed.
        """
        self.require_complete_grid("export outputs")
        return [sample.y for sample in self._samples]

    def grid_values(self, dimension: int) -> tuple[float, ...]:
        """Return sorted distinct coordinates observed on one dimension."""
        return self._grid.values(dimension)

    def summary(self) -> TableSummary:
        """Return current counters without applying the completeness guard."""
        return TableSummary(
            sample_count=len(self._samples),
            duplicate_count=self._duplicate_count,
            dimensionality=self._dimensionality,
            required_count=self.get_num_samples_required(),
            grid_complete=self.is_grid_complete(),
        )

    def describe_samples(self) -> str:
        """Render one line per stored sample in storage order."""
        return "\n".join(
            f"({', '.join(repr(value) for value in sample.x)}) -> {sample.y!r}"
            for sample in self._samples
        )

    def describe_grid(self) -> str:
        """Render the observed values per dimension and grid counters."""
        lines = ["===== Grid ====="]
        for dimension in range(self._dimensionality):
            values = self._grid.values(dimension)
            rendered = " ".join(repr(value) for value in values)
            lines.append(f"x{dimension} ({len(values)}): {rendered}")
        lines.append(f"Distinct samples added: {len(self._samples) - self._duplicate_count}")
        lines.append(f"Samples required: {self.get_num_samples_required()}")
        return "\n".join(lines)

    def save(self, path: str | Path, table_format: str | None = None) -> Path:
        """Write every sample to ``path``.

        Args:
            path: Output file path.
            table_format: ``binary`` or ``text``; store default when omitted.

        Returns:
            Written file path.

        Raises:
            IncompleteGridError: If the grid is incomplete and that is not allowed.
            UnknownFormatError: If the format name is not supported.
            GridTableIOError: If the file cannot be written.
        """
        return save_table(
            self,
            Path(path),
            table_format or self._default_format,
            self._text_precision,
        )

    def load(self, path: str | Path, table_format: str | None = None) -> int:
        """Read samples from ``path`` into this store.

        Loaded samples go through ``add`` exactly like direct insertions.

        Args:
            path: Input file path.
            table_format: ``binary`` or ``text``; store default when omitted.

        Returns:
            Number of records read from the file.

        Raises:
            UnknownFormatError: If the format name is not supported.
            GridTableIOError: If the file cannot be read.
            GridTableFormatError: If the file content is invalid.
        """
        return load_table(self, Path(path), table_format or self._default_format)

    def __len__(self) -> int:
        return len(self._samples)

    def _check_dimensionality(self, sample: Sample) -> None:
        if sample.dimensionality == 0:
            raise GridContractError(
                "Cannot add a sample without input coordinates: "
                "every sample needs at least one dimension."
            )
        if self._samples and sample.dimensionality != self._dimensionality:
            raise DimensionMismatchError(
                f"Sample has {sample.dimensionality} input coordinates but the table "
                f"holds {self._dimensionality}-dimensional samples."
            )
