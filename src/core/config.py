"""Runtime configuration model for gridtable.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_FORMAT,
    DEFAULT_TEXT_PRECISION,
    ENV_ALLOW_DUPLICATES,
    ENV_ALLOW_INCOMPLETE_GRID,
    ENV_DEFAULT_FORMAT,
    ENV_TEXT_PRECISION,
    FALSE_VALUES,
    MAX_TEXT_PRECISION,
    MIN_TEXT_PRECISION,
    SUPPORTED_FORMATS,
    TRUE_VALUES,
)
from core.errors import GridTableConfigError


@dataclass(frozen=True)
class GridTableConfig:
    """Validated runtime configuration.

    Attributes:
        allow_duplicates: Keep repeated samples and count them as duplicates.
        allow_incomplete_grid: Let exports proceed on a partial grid.
        text_precision: Significant digits written by the text codec.
        default_format: Format used when save/load callers pass none.
    """

    allow_duplicates: bool = False
    allow_incomplete_grid: bool = False
    text_precision: int = DEFAULT_TEXT_PRECISION
    default_format: str = DEFAULT_FORMAT

    @classmethod
    def from_env(cls) -> "GridTableConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            GridTableConfigError: If environment values are invalid.
        """
        return cls(
            allow_duplicates=_parse_flag(ENV_ALLOW_DUPLICATES, os.getenv(ENV_ALLOW_DUPLICATES, "")),
            allow_incomplete_grid=_parse_flag(
                ENV_ALLOW_INCOMPLETE_GRID, os.getenv(ENV_ALLOW_INCOMPLETE_GRID, "")
            ),
            text_precision=_parse_text_precision(
                os.getenv(ENV_TEXT_PRECISION, str(DEFAULT_TEXT_PRECISION))
            ),
            default_format=_parse_default_format(os.getenv(ENV_DEFAULT_FORMAT, DEFAULT_FORMAT)),
        )


def _parse_default_format(raw_value: str) -> str:
    """Parse the default serialization format name.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Normalized format name.

    Raises:
        GridTableConfigError: If the format is not supported.
    """
    normalized = raw_value.strip().lower()
    if normalized not in SUPPORTED_FORMATS:
        raise GridTableConfigError(
            f"Invalid {ENV_DEFAULT_FORMAT} value: expected one of "
            f"{', '.join(SUPPORTED_FORMATS)}, got '{raw_value}'."
        )
    return normalized


def _parse_flag(env_name: str, raw_value: str) -> bool:
    """Parse a boolean environment flag.

    Args:
        env_name: Variable name used in error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed flag value.

    Raises:
        GridTableConfigError: If value is not a recognized boolean.
    """
    normalized = raw_value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise GridTableConfigError(
        f"Invalid {env_name} value: expected a boolean, got '{raw_value}'. "
        f"Use one of {', '.join(TRUE_VALUES)} or {', '.join(v for v in FALSE_VALUES if v)}."
    )


def _parse_text_precision(raw_value: str) -> int:
    """Parse the text precision environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed precision in significant digits.

    Raises:
        GridTableConfigError: If value is not an integer in range.
    """
    try:
        precision = int(raw_value)
    except ValueError as error:
        raise GridTableConfigError(
            f"Invalid {ENV_TEXT_PRECISION} value: expected integer, got '{raw_value}'. "
            f"Set {ENV_TEXT_PRECISION} to a number of significant digits."
        ) from error
    if not MIN_TEXT_PRECISION <= precision <= MAX_TEXT_PRECISION:
        raise GridTableConfigError(
            f"Invalid {ENV_TEXT_PRECISION} value: {precision} is outside "
            f"[{MIN_TEXT_PRECISION}, {MAX_TEXT_PRECISION}]."
        )
    return precision
