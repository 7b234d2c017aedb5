"""Loader configuration.

Provides a single frozen dataclass holding every option that influences
language resolution, compilation and caching. The I18n facade derives a new
instance for each setter call and stops accepting changes once initialized,
so the configuration consumed by initialization is immutable.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from langcache.constants import (
    DEFAULT_CACHE_PATH,
    DEFAULT_FALLBACK_LANG,
    DEFAULT_FILE_PATH,
    DEFAULT_PREFIX,
    DEFAULT_SECTION_SEPARATOR,
    LANGUAGE_PLACEHOLDER,
)
from langcache.core.identifier_validation import is_valid_identifier, is_valid_language_code
from langcache.errors import ConfigurationError

__all__ = ["LoaderConfig"]


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Immutable configuration for an I18n loader.

    All fields have defaults; ``LoaderConfig()`` is a usable configuration
    reading ``./lang/lang_{LANGUAGE}.ini`` and caching into ``./langcache/``.

    Attributes:
        file_path: Source file template; every ``{LANGUAGE}`` is replaced by a
            candidate language code.
        cache_path: Directory holding compiled cache records.
        fallback_lang: Lowest-priority language, always tried last.
        merge_fallback: Deep-merge the fallback language's strings under the
            applied language's strings.
        prefix: Name of the activated catalog (``L`` -> ``L.greeting``).
        section_separator: Joins section names and keys in qualified names.
        static_map: Placeholder -> replacement applied to every literal at
            compile time (``{"TYPE": "Favorite"}`` turns ``My {TYPE} string``
            into ``My Favorite string``).
        forced_lang: Language tried before any request signal (optional).

    Example:
        >>> config = LoaderConfig(file_path="locales/{LANGUAGE}.json", fallback_lang="de")
        >>> config.replace(merge_fallback=True).merge_fallback
        True
    """

    file_path: str = DEFAULT_FILE_PATH
    cache_path: str = DEFAULT_CACHE_PATH
    fallback_lang: str = DEFAULT_FALLBACK_LANG
    merge_fallback: bool = False
    prefix: str = DEFAULT_PREFIX
    section_separator: str = DEFAULT_SECTION_SEPARATOR
    static_map: Mapping[str, str] = field(default_factory=dict)
    forced_lang: str | None = None

    def __post_init__(self) -> None:
        """Validate and normalize option values.

        Raises:
            ConfigurationError: If any option has an invalid type or value
        """
        if not isinstance(self.file_path, str) or LANGUAGE_PLACEHOLDER not in self.file_path:
            msg = (
                f"file_path must contain '{LANGUAGE_PLACEHOLDER}' placeholder for "
                f"language substitution, got: {self.file_path!r}"
            )
            raise ConfigurationError(msg)

        if not isinstance(self.cache_path, (str, os.PathLike)) or not os.fspath(self.cache_path):
            msg = f"cache_path must be a non-empty path, got: {self.cache_path!r}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "cache_path", os.fspath(self.cache_path))

        if (
            not isinstance(self.fallback_lang, str)
            or not self.fallback_lang
            or not is_valid_language_code(self.fallback_lang)
        ):
            msg = (
                "fallback_lang must be a non-empty code of letters, digits, '_' or '-', "
                f"got: {self.fallback_lang!r}"
            )
            raise ConfigurationError(msg)

        if not isinstance(self.merge_fallback, bool):
            msg = f"merge_fallback must be a bool, got: {self.merge_fallback!r}"
            raise ConfigurationError(msg)

        if not isinstance(self.prefix, str) or not is_valid_identifier(self.prefix):
            msg = f"prefix must be a valid identifier, got: {self.prefix!r}"
            raise ConfigurationError(msg)

        if not isinstance(self.section_separator, str):
            msg = f"section_separator must be a string, got: {self.section_separator!r}"
            raise ConfigurationError(msg)

        if self.forced_lang is not None and not isinstance(self.forced_lang, str):
            msg = f"forced_lang must be a string or None, got: {self.forced_lang!r}"
            raise ConfigurationError(msg)

        if not isinstance(self.static_map, Mapping):
            msg = f"static_map must be a mapping, got: {type(self.static_map).__name__}"
            raise ConfigurationError(msg)
        for placeholder, replacement in self.static_map.items():
            if not isinstance(placeholder, str) or not isinstance(replacement, str):
                msg = (
                    "static_map keys and values must be strings, "
                    f"got: {placeholder!r} -> {replacement!r}"
                )
                raise ConfigurationError(msg)
        # Copy so later mutation of the caller's dict cannot leak in
        object.__setattr__(self, "static_map", MappingProxyType(dict(self.static_map)))

    def replace(self, **changes: object) -> LoaderConfig:
        """Return a copy with the given fields changed (validated again)."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]
