"""Scoped numeric locale override.

Table files always use the "C" decimal convention. Saving and loading
pin LC_NUMERIC for the duration of the operation and restore the
previous setting when the block exits, including on errors.
"""

from __future__ import annotations

import locale
from contextlib import contextmanager
from typing import Iterator

from core.constants import NUMERIC_LOCALE


@contextmanager
def pinned_numeric_locale(locale_name: str = NUMERIC_LOCALE) -> Iterator[str]:
    """Pin LC_NUMERIC to ``locale_name`` and restore it on exit.

    Args:
        locale_name: Locale applied inside the block.

    Yields:
        The locale setting that was active before the block.
    """
    previous = locale.setlocale(locale.LC_NUMERIC)
    locale.setlocale(locale.LC_NUMERIC, locale_name)
    try:
        yield previous
    finally:
        locale.setlocale(locale.LC_NUMERIC, previous)
