"""Enumerations for langcache type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LoaderState(StrEnum):
    """Lifecycle state of an I18n loader.

    StrEnum provides automatic string conversion: str(LoaderState.CONFIGURED) == "configured"
    """

    CONFIGURED = "configured"
    """Options may be changed; nothing has been resolved or compiled."""

    INITIALIZED = "initialized"
    """Terminal: configuration frozen, catalog activated."""


class CacheStatus(StrEnum):
    """Outcome of the cache staleness check during initialization."""

    FRESH = "fresh"
    """Existing cache record reused without touching the source files."""

    MISSING = "missing"
    """No cache record existed; catalog compiled from source."""

    OUTDATED = "outdated"
    """Source (or fallback) file is newer than the cache record."""

    MISMATCH = "mismatch"
    """Cache record was built with different compile options."""

    CORRUPT = "corrupt"
    """Cache record failed to load or verify and was rebuilt."""


class SignalSource(StrEnum):
    """Origin of a candidate language code, highest priority first."""

    FORCED = "forced"
    """Explicitly forced language from the loader configuration."""

    QUERY = "query"
    """Query string parameter: ?lang=de"""

    SESSION = "session"
    """Session store key: session["lang"]"""

    HEADER = "header"
    """Accept-Language request header entries."""

    COOKIE = "cookie"
    """Cookie value: lang=de"""

    FALLBACK = "fallback"
    """Configured fallback language (always last)."""


__all__ = [
    "CacheStatus",
    "LoaderState",
    "SignalSource",
]
