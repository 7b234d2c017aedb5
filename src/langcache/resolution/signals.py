"""Language preference signals and candidate collection.

The transport layer (query string, session store, headers, cookies) is
represented by an explicit RequestSignals parameter object. The collector is
a pure function of the loader configuration and those signals.

Priority, highest first:
    1. Forced language (configuration)
    2. Query string ``lang``
    3. Session ``lang``
    4. ``Accept-Language`` header (first two characters of each entry)
    5. Cookie ``lang``
    6. Fallback language (configuration, always appended)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from http.cookies import CookieError, SimpleCookie
from types import MappingProxyType
from typing import TYPE_CHECKING
from urllib.parse import parse_qs

from langcache.constants import (
    ACCEPT_LANGUAGE_CODE_LENGTH,
    ACCEPT_LANGUAGE_HEADER,
    LANG_PARAMETER,
)
from langcache.core.identifier_validation import is_valid_language_code
from langcache.enums import SignalSource
from langcache.errors import ConfigurationError
from langcache.types import LanguageCode

if TYPE_CHECKING:
    from langcache.config import LoaderConfig

__all__ = [
    "RequestSignals",
    "collect_user_langs",
    "iter_signal_candidates",
    "parse_accept_language",
]

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, object] = MappingProxyType({})


def _freeze(source: Mapping[str, object] | None) -> Mapping[str, object]:
    return MappingProxyType(dict(source)) if source else _EMPTY


@dataclass(frozen=True, slots=True)
class RequestSignals:
    """Locale-preference sources of a single request.

    Every source is optional; absence is never an error. Values that are not
    strings (e.g. ``?lang[]=x`` decoded as a list) are ignored.

    Attributes:
        query: Decoded query string parameters
        session: Session store contents
        headers: Request headers (looked up case-insensitively)
        cookies: Cookie values

    Example:
        >>> signals = RequestSignals(query={"lang": "de"}, headers={"accept-language": "fr,en"})
        >>> signals.header(ACCEPT_LANGUAGE_HEADER)
        'fr,en'
    """

    query: Mapping[str, object] = field(default_factory=dict)
    session: Mapping[str, object] = field(default_factory=dict)
    headers: Mapping[str, object] = field(default_factory=dict)
    cookies: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Copy sources into read-only mappings."""
        object.__setattr__(self, "query", _freeze(self.query))
        object.__setattr__(self, "session", _freeze(self.session))
        object.__setattr__(self, "headers", _freeze(self.headers))
        object.__setattr__(self, "cookies", _freeze(self.cookies))

    def header(self, name: str) -> str | None:
        """Return a header value by case-insensitive name, or None."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted and isinstance(value, str):
                return value
        return None

    @classmethod
    def from_wsgi_environ(
        cls,
        environ: Mapping[str, object],
        session: Mapping[str, object] | None = None,
    ) -> RequestSignals:
        """Build signals from a WSGI environ dictionary.

        Only the first value of a repeated query parameter is used. Malformed
        cookie headers are ignored.

        Args:
            environ: WSGI environ (``QUERY_STRING``, ``HTTP_ACCEPT_LANGUAGE``,
                ``HTTP_COOKIE``)
            session: Session store contents, if the application has one

        Returns:
            RequestSignals for the request
        """
        query_string = environ.get("QUERY_STRING")
        query: dict[str, object] = {}
        if isinstance(query_string, str):
            query = {key: values[0] for key, values in parse_qs(query_string).items()}

        headers: dict[str, object] = {}
        accept_language = environ.get("HTTP_ACCEPT_LANGUAGE")
        if isinstance(accept_language, str):
            headers[ACCEPT_LANGUAGE_HEADER] = accept_language

        cookies: dict[str, object] = {}
        cookie_header = environ.get("HTTP_COOKIE")
        if isinstance(cookie_header, str):
            jar = SimpleCookie()
            try:
                jar.load(cookie_header)
            except CookieError:
                logger.debug("Ignoring malformed cookie header: %r", cookie_header)
            else:
                cookies = {key: morsel.value for key, morsel in jar.items()}

        return cls(query=query, session=session, headers=headers, cookies=cookies)


def parse_accept_language(header: str) -> list[LanguageCode]:
    """Extract candidate codes from an Accept-Language header.

    Each comma-separated entry is stripped of surrounding whitespace,
    truncated to its first two characters and lower-cased, in header order.
    Quality values are not interpreted.

    Example:
        >>> parse_accept_language("de-DE,de-CH;q=0.8, EN")
        ['de', 'de', 'en']
    """
    return [part.strip()[:ACCEPT_LANGUAGE_CODE_LENGTH].lower() for part in header.split(",")]


def _string_value(source: Mapping[str, object], key: str) -> str | None:
    value = source.get(key)
    return value if isinstance(value, str) else None


def iter_signal_candidates(
    config: LoaderConfig, signals: RequestSignals
) -> Iterator[tuple[SignalSource, LanguageCode]]:
    """Yield raw (source, code) candidates in priority order.

    No deduplication or validation happens here; see collect_user_langs().
    """
    if config.forced_lang is not None:
        yield SignalSource.FORCED, config.forced_lang

    query_lang = _string_value(signals.query, LANG_PARAMETER)
    if query_lang is not None:
        yield SignalSource.QUERY, query_lang

    session_lang = _string_value(signals.session, LANG_PARAMETER)
    if session_lang is not None:
        yield SignalSource.SESSION, session_lang

    accept_language = signals.header(ACCEPT_LANGUAGE_HEADER)
    if accept_language is not None:
        for code in parse_accept_language(accept_language):
            yield SignalSource.HEADER, code

    cookie_lang = _string_value(signals.cookies, LANG_PARAMETER)
    if cookie_lang is not None:
        yield SignalSource.COOKIE, cookie_lang

    yield SignalSource.FALLBACK, config.fallback_lang


def collect_user_langs(
    config: LoaderConfig, signals: RequestSignals | None = None
) -> tuple[LanguageCode, ...]:
    """Derive the ordered, deduplicated, validated candidate language list.

    Duplicates are removed keeping the first occurrence; the relative order
    of the remaining codes is preserved. Empty codes and codes containing
    characters other than ASCII letters, digits, ``_`` and ``-`` are discarded.

    Args:
        config: Loader configuration (forced and fallback language)
        signals: Request signals; None means no request context

    Returns:
        Candidate codes, highest priority first

    Raises:
        ConfigurationError: If no valid candidate remains

    Example:
        >>> signals = RequestSignals(
        ...     query={"lang": "cz"}, session={"lang": "fr"},
        ...     headers={"Accept-Language": "it,no"}, cookies={"lang": "es"},
        ... )
        >>> collect_user_langs(LoaderConfig(forced_lang="de"), signals)
        ('de', 'cz', 'fr', 'it', 'no', 'es', 'en')
    """
    if signals is None:
        signals = RequestSignals()

    # dict.fromkeys() removes duplicates while maintaining insertion order
    unique = dict.fromkeys(code for _, code in iter_signal_candidates(config, signals))
    langs = tuple(code for code in unique if code and is_valid_language_code(code))

    if not langs:
        msg = f"No valid language candidate (fallback_lang={config.fallback_lang!r})"
        raise ConfigurationError(msg)

    logger.debug("User languages: %s", langs)
    return langs
