"""Locale utilities for applied language codes.

Converts the language codes used in file names (``de``, ``pt-BR``, ``pt_BR``)
into Babel Locale objects so applications can format numbers and dates in
the same language the catalog was compiled for.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from langcache.core.compat import require_babel

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 style code to POSIX format for Babel.

    Args:
        locale_code: Language code (e.g., "en-US", "pt_BR", "de")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR", "de")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("de")
        'de'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Language code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        OptionalDependencyError: If Babel is not installed
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> get_babel_locale("de-CH").territory
        'CH'
    """
    require_babel("get_babel_locale")
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def clear_locale_cache() -> None:
    """Clear cached Babel Locale objects."""
    get_babel_locale.cache_clear()
