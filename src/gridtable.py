"""Public SDK surface for gridtable.

This module provides a stable import path for table consumers.
It re-exports the sample store, configuration, and typed errors.
"""

from __future__ import annotations

from core.config import GridTableConfig
from core.errors import (
    DimensionMismatchError,
    GridContractError,
    GridTableConfigError,
    GridTableError,
    GridTableFormatError,
    GridTableIOError,
    IncompleteGridError,
    InvalidOrderMarkerError,
    MalformedTokenError,
    TokenRangeError,
    TruncatedHeaderError,
    UnknownFormatError,
    UnsupportedFloatWidthError,
    UnsupportedOutputDimensionError,
)
from core.types import InsertOutcome, Sample, TableFormat, TableSummary
from store.sample_store import SampleStore

__all__ = [
    "DimensionMismatchError",
    "GridContractError",
    "GridTableConfig",
    "GridTableConfigError",
    "GridTableError",
    "GridTableFormatError",
    "GridTableIOError",
    "IncompleteGridError",
    "InsertOutcome",
    "InvalidOrderMarkerError",
    "MalformedTokenError",
    "Sample",
    "SampleStore",
    "TableFormat",
    "TableSummary",
    "TokenRangeError",
    "TruncatedHeaderError",
    "UnknownFormatError",
    "UnsupportedFloatWidthError",
    "UnsupportedOutputDimensionError",
]
