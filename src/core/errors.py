"""gridtable exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each failure kind raises a specific error type so callers can tell
contract violations, policy refusals, IO failures, and bad files apart.
"""

from __future__ import annotations


class GridTableError(Exception):
    """Base exception for all gridtable failures."""


class GridTableConfigError(GridTableError):
    """Raised for invalid runtime configuration."""


class IncompleteGridError(GridTableConfigError):
    """Raised when an export needs a complete grid that is not allowed to be partial."""


class GridContractError(GridTableError):
    """Raised when a caller violates a store precondition."""


class DimensionMismatchError(GridContractError):
    """Raised when a sample does not match the table dimensionality."""


class GridTableIOError(GridTableError):
    """Raised when a table file cannot be opened, read, or written."""


class GridTableFormatError(GridTableError):
    """Raised when a table file does not follow the expected layout."""


class UnknownFormatError(GridTableFormatError):
    """Raised for an unsupported serialization format name."""


class InvalidOrderMarkerError(GridTableFormatError):
    """Raised when the binary order marker is not a recognized value."""


class TruncatedHeaderError(GridTableFormatError, GridTableIOError):
    """Raised when the stream ends before the binary header is complete."""


class UnsupportedFloatWidthError(GridTableFormatError):
    """Raised when a binary file was produced with a different float width."""


class UnsupportedOutputDimensionError(GridTableFormatError):
    """Raised when a file declares more than one output per sample."""


class MalformedTokenError(GridTableFormatError):
    """Raised when a numeric token cannot be parsed."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class TokenRangeError(GridTableFormatError):
    """Raised when a numeric token lies outside the representable range."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number
