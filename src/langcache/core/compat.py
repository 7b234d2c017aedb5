"""Compatibility layer for optional dependency handling.

Provides centralized, lazy import infrastructure for Babel and PyYAML so both
remain optional and produce consistent error messages when missing.

Design Rationale:
    langcache supports three installation modes:
    - Core: `pip install langcache` (INI and JSON sources, no external dependencies)
    - YAML sources: `pip install langcache[yaml]` (adds PyYAML)
    - Locale metadata: `pip install langcache[babel]` (adds Babel for applied_locale)

    This module ensures that:
    1. Core installations never trigger Babel or PyYAML imports
    2. The YAML decoder is registered only when PyYAML can be imported
    3. Features that need a missing library fail with a helpful ImportError

Usage Pattern:
    from langcache.core.compat import require_babel

    def my_function(code: str) -> None:
        require_babel("my_function")  # Raises OptionalDependencyError if missing
        from babel import Locale  # Safe to import Babel now
        ...

Python 3.13+.
"""

from __future__ import annotations

import importlib.util
from functools import lru_cache

__all__ = [
    "OptionalDependencyError",
    "is_babel_available",
    "is_yaml_available",
    "require_babel",
    "require_yaml",
]


@lru_cache(maxsize=4)
def _check_available(module: str) -> bool:
    """Check if a top-level module is installed (computed once per module)."""
    return importlib.util.find_spec(module) is not None


class OptionalDependencyError(ImportError):
    """Raised when an optional dependency is required but not installed.

    Attributes:
        feature: Name of the feature requiring the dependency
        extra: Name of the langcache extra that installs it
    """

    def __init__(self, feature: str, library: str, extra: str) -> None:
        """Create error with feature-specific message.

        Args:
            feature: Name of the feature/function requiring the library
            library: Distribution name of the missing library
            extra: langcache extra that pulls in the library
        """
        message = (
            f"{feature} requires {library}. "
            f"Install with: pip install langcache[{extra}]"
        )
        super().__init__(message)
        self.feature = feature
        self.extra = extra


def is_babel_available() -> bool:
    """Check if Babel is installed.

    Returns:
        True if Babel is importable, False otherwise.
    """
    return _check_available("babel")


def is_yaml_available() -> bool:
    """Check if PyYAML is installed.

    Returns:
        True if the ``yaml`` module is importable, False otherwise.
    """
    return _check_available("yaml")


def require_babel(feature: str) -> None:
    """Assert that Babel is available.

    Args:
        feature: Name of the feature requiring Babel (for error message)

    Raises:
        OptionalDependencyError: If Babel is not installed
    """
    if not is_babel_available():
        raise OptionalDependencyError(feature, "Babel", "babel")


def require_yaml(feature: str) -> None:
    """Assert that PyYAML is available.

    Args:
        feature: Name of the feature requiring PyYAML (for error message)

    Raises:
        OptionalDependencyError: If PyYAML is not installed
    """
    if not is_yaml_available():
        raise OptionalDependencyError(feature, "PyYAML", "yaml")
