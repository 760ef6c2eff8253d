"""Core constants used across gridtable modules.

This module centralizes wire-format markers and configuration defaults.
Keeping values here avoids magic literals in codec and store logic.
"""

from __future__ import annotations

BINARY_FORMAT = "binary"
TEXT_FORMAT = "text"
SUPPORTED_FORMATS = (BINARY_FORMAT, TEXT_FORMAT)
DEFAULT_FORMAT = BINARY_FORMAT

LITTLE_ENDIAN_ORDER_MARKER = 0xFFFE
BIG_ENDIAN_ORDER_MARKER = 0xFEFF
BINARY_LAYOUT_VERSION = 1
FLOAT_WIDTH_BYTES = 8
OUTPUT_DIMENSIONALITY = 1
MAX_INPUT_DIMENSIONALITY = 65535

DEFAULT_TEXT_PRECISION = 17
MIN_TEXT_PRECISION = 1
MAX_TEXT_PRECISION = 17
TEXT_COMMENT_PREFIX = "#"
TEXT_TITLE_LINE = "# Saved sample table"

NUMERIC_LOCALE = "C"
INT_TOKEN_MIN = -(2**31)
INT_TOKEN_MAX = 2**31 - 1

ENV_ALLOW_DUPLICATES = "GRIDTABLE_ALLOW_DUPLICATES"
ENV_ALLOW_INCOMPLETE_GRID = "GRIDTABLE_ALLOW_INCOMPLETE_GRID"
ENV_TEXT_PRECISION = "GRIDTABLE_TEXT_PRECISION"
ENV_DEFAULT_FORMAT = "GRIDTABLE_DEFAULT_FORMAT"
TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off", "")
