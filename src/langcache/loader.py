"""Loader facade: configure once, initialize once, translate many times.

I18n ties the pipeline together:

    collect_user_langs -> resolve_language_file -> cache staleness check
        -> (stale) load_translation_file -> merge_fallback -> compile_artifact
           -> write_artifact
        -> (fresh) read_artifact
    -> activate

State machine:
    CONFIGURED  -- init()/finish_setup() -->  INITIALIZED (terminal)

Every option can be changed while CONFIGURED. Once initialized, setters and
further init() calls raise AlreadyInitializedError. A failed initialization
activates nothing and leaves the loader CONFIGURED so it can be corrected
and retried.

Example:
    >>> i18n = I18n("lang/lang_{LANGUAGE}.ini", "langcache/", "en")
    >>> i18n.merge_fallback = True
    >>> i18n.signals = RequestSignals(query={"lang": "de"})
    >>> L = i18n.init()
    >>> L.greeting
    'Hallo Welt!'

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from langcache.cache import (
    cache_file_path,
    fingerprint,
    is_stale,
    read_artifact,
    write_artifact,
)
from langcache.compiler import CompiledArtifact, compile_artifact
from langcache.config import LoaderConfig
from langcache.enums import CacheStatus, LoaderState
from langcache.errors import (
    AlreadyInitializedError,
    CacheCorruptionError,
    NoLanguageFileFoundError,
)
from langcache.loading import DecoderRegistry, load_translation_file, merge_fallback
from langcache.locale_utils import get_babel_locale
from langcache.resolution import (
    RequestSignals,
    collect_user_langs,
    language_file_path,
    resolve_language_file,
)
from langcache.runtime.namespace import activate
from langcache.types import LanguageCode

if TYPE_CHECKING:
    from babel import Locale

    from langcache.runtime.catalog import Translations

__all__ = ["I18n", "InitSummary"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InitSummary:
    """Immutable record of what an initialization did.

    Attributes:
        user_langs: Candidate languages, highest priority first
        applied_lang: Language whose source file was used
        source_path: Source file of the applied language
        fallback_path: Fallback source file (only when merging)
        cache_path: Cache record that was reused or written
        cache_status: Outcome of the staleness check
    """

    user_langs: tuple[LanguageCode, ...]
    applied_lang: LanguageCode
    source_path: Path
    fallback_path: Path | None
    cache_path: Path
    cache_status: CacheStatus

    @property
    def compiled(self) -> bool:
        """True if the catalog was compiled from source during this run."""
        return self.cache_status != CacheStatus.FRESH


class I18n:
    """Stateful translation loader.

    All constructor arguments are optional; None keeps the default
    (see LoaderConfig).

    Attributes:
        config: Current (frozen after initialization) LoaderConfig
        state: LoaderState.CONFIGURED or LoaderState.INITIALIZED
    """

    __slots__ = (
        "_config",
        "_decoders",
        "_signals",
        "_state",
        "_summary",
        "_translations",
    )

    def __init__(
        self,
        file_path: str | None = None,
        cache_path: str | None = None,
        fallback_lang: str | None = None,
        prefix: str | None = None,
        *,
        signals: RequestSignals | None = None,
        decoders: DecoderRegistry | None = None,
    ) -> None:
        """Create a loader in the CONFIGURED state.

        Args:
            file_path: Source file template containing ``{LANGUAGE}``
            cache_path: Directory for compiled cache records
            fallback_lang: Lowest-priority language
            prefix: Name the catalog is activated under
            signals: Request signals used to collect user languages
            decoders: Decoder registry; defaults to DecoderRegistry.default()

        Raises:
            ConfigurationError: If any given option is invalid
        """
        overrides = {
            "file_path": file_path,
            "cache_path": cache_path,
            "fallback_lang": fallback_lang,
            "prefix": prefix,
        }
        self._config = LoaderConfig(**{k: v for k, v in overrides.items() if v is not None})
        self._signals = signals if signals is not None else RequestSignals()
        self._decoders = decoders if decoders is not None else DecoderRegistry.default()
        self._state = LoaderState.CONFIGURED
        self._summary: InitSummary | None = None
        self._translations: Translations | None = None

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"I18n(state={self._state.value!r}, file_path={self._config.file_path!r}, "
            f"applied_lang={self.applied_lang!r})"
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def _fail_after_init(self) -> None:
        if self._state is LoaderState.INITIALIZED:
            msg = "This I18n object is already initialized, so its settings cannot be changed"
            raise AlreadyInitializedError(msg)

    def _update(self, **changes: object) -> None:
        self._fail_after_init()
        self._config = self._config.replace(**changes)

    @property
    def config(self) -> LoaderConfig:
        """Current configuration."""
        return self._config

    @property
    def file_path(self) -> str:
        """Source file template containing ``{LANGUAGE}``."""
        return self._config.file_path

    @file_path.setter
    def file_path(self, value: str) -> None:
        self._update(file_path=value)

    @property
    def cache_path(self) -> str:
        """Directory for compiled cache records."""
        return self._config.cache_path

    @cache_path.setter
    def cache_path(self, value: str) -> None:
        self._update(cache_path=value)

    @property
    def fallback_lang(self) -> str:
        """Lowest-priority language, always tried last."""
        return self._config.fallback_lang

    @fallback_lang.setter
    def fallback_lang(self, value: str) -> None:
        self._update(fallback_lang=value)

    @property
    def merge_fallback(self) -> bool:
        """Whether fallback language strings fill gaps in the applied language."""
        return self._config.merge_fallback

    @merge_fallback.setter
    def merge_fallback(self, value: bool) -> None:
        self._update(merge_fallback=value)

    @property
    def prefix(self) -> str:
        """Name the catalog is activated under."""
        return self._config.prefix

    @prefix.setter
    def prefix(self, value: str) -> None:
        self._update(prefix=value)

    @property
    def forced_lang(self) -> str | None:
        """Language tried before any request signal."""
        return self._config.forced_lang

    @forced_lang.setter
    def forced_lang(self, value: str | None) -> None:
        self._update(forced_lang=value)

    @property
    def section_separator(self) -> str:
        """Separator joining section names and keys."""
        return self._config.section_separator

    @section_separator.setter
    def section_separator(self, value: str) -> None:
        self._update(section_separator=value)

    @property
    def static_map(self) -> Mapping[str, str]:
        """Placeholder -> replacement applied at compile time (read-only view)."""
        return self._config.static_map

    @static_map.setter
    def static_map(self, value: Mapping[str, str]) -> None:
        self._update(static_map=value)

    @property
    def signals(self) -> RequestSignals:
        """Request signals used to collect user languages."""
        return self._signals

    @signals.setter
    def signals(self, value: RequestSignals | None) -> None:
        self._fail_after_init()
        self._signals = value if value is not None else RequestSignals()

    @property
    def decoders(self) -> DecoderRegistry:
        """Decoder registry used for source files."""
        return self._decoders

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> LoaderState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_initialized(self) -> bool:
        """True once init()/finish_setup() has succeeded."""
        return self._state is LoaderState.INITIALIZED

    @property
    def applied_lang(self) -> LanguageCode | None:
        """Applied language, or None before initialization."""
        return self._summary.applied_lang if self._summary is not None else None

    @property
    def applied_locale(self) -> Locale | None:
        """Babel Locale of the applied language, or None before initialization.

        Raises:
            OptionalDependencyError: If Babel is not installed
            babel.core.UnknownLocaleError: If Babel does not know the language
        """
        if self._summary is None:
            return None
        return get_babel_locale(self._summary.applied_lang)

    @property
    def summary(self) -> InitSummary | None:
        """What the initialization did, or None before initialization."""
        return self._summary

    @property
    def translations(self) -> Translations | None:
        """The activated catalog, or None before initialization."""
        return self._translations

    def get_user_langs(self) -> tuple[LanguageCode, ...]:
        """Candidate languages for the current configuration and signals.

        Raises:
            ConfigurationError: If no valid candidate remains
        """
        return collect_user_langs(self._config, self._signals)

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def _reuse_cached(
        self,
        config: LoaderConfig,
        cache_path: Path,
        expected_fingerprint: str,
        source_path: Path,
        fallback_path: Path | None,
    ) -> tuple[CompiledArtifact | None, CacheStatus]:
        """Return the cached artifact if it is fresh, else (None, reason)."""
        if is_stale(cache_path, source_path, fallback_path):
            status = CacheStatus.OUTDATED if cache_path.exists() else CacheStatus.MISSING
            logger.debug("Cache %s is %s", cache_path, status)
            return None, status

        try:
            artifact = read_artifact(cache_path)
        except CacheCorruptionError as e:
            logger.warning("Discarding corrupt cache record: %s", e)
            return None, CacheStatus.CORRUPT

        if artifact.fingerprint != expected_fingerprint or not artifact.matches(config):
            logger.debug("Cache %s was built with different options", cache_path)
            return None, CacheStatus.MISMATCH

        return artifact, CacheStatus.FRESH

    def _compile(
        self,
        config: LoaderConfig,
        language: LanguageCode,
        source_path: Path,
        fallback_path: Path | None,
        cache_fingerprint: str,
    ) -> CompiledArtifact:
        tree = load_translation_file(source_path, self._decoders)
        if fallback_path is not None and fallback_path != source_path:
            fallback_tree = load_translation_file(fallback_path, self._decoders)
            tree = merge_fallback(tree, fallback_tree)
        return compile_artifact(tree, config, language, cache_fingerprint)

    def init(self) -> Translations:
        """Resolve, compile (if needed) and activate the translation catalog.

        Returns:
            The activated Translations catalog

        Raises:
            AlreadyInitializedError: If the loader is already initialized
            ConfigurationError: If no valid candidate language remains
            NoLanguageFileFoundError: If no candidate (or, when merging, the
                fallback language) has a source file
            UnsupportedFormatError: If no decoder handles the source extension
            SourceFormatError: If a source file cannot be decoded
            InvalidIdentifierError: If a qualified name is not an identifier
            WriteError: If the cache record cannot be written
        """
        if self._state is LoaderState.INITIALIZED:
            msg = "This I18n object is already initialized; it cannot be initialized twice"
            raise AlreadyInitializedError(msg)

        config = self._config
        user_langs = collect_user_langs(config, self._signals)
        resolved = resolve_language_file(user_langs, config.file_path)

        fallback_path: Path | None = None
        if config.merge_fallback:
            fallback_path = language_file_path(config.file_path, config.fallback_lang)
            if not fallback_path.is_file():
                raise NoLanguageFileFoundError((config.fallback_lang,), config.file_path)

        cache_path = cache_file_path(config, resolved.language)
        cache_fingerprint = fingerprint(config, resolved.language)

        artifact, status = self._reuse_cached(
            config, cache_path, cache_fingerprint, resolved.path, fallback_path
        )
        if artifact is None:
            artifact = self._compile(
                config, resolved.language, resolved.path, fallback_path, cache_fingerprint
            )
            write_artifact(artifact, cache_path)
        else:
            logger.debug("Reusing cache record %s", cache_path)

        self._translations = activate(artifact)
        self._summary = InitSummary(
            user_langs=user_langs,
            applied_lang=resolved.language,
            source_path=resolved.path,
            fallback_path=fallback_path,
            cache_path=cache_path,
            cache_status=status,
        )
        self._state = LoaderState.INITIALIZED
        return self._translations

    def finish_setup(self) -> bool:
        """Initialize the loader (see init()).

        Returns:
            True on success

        Raises:
            AlreadyInitializedError: If the loader is already initialized
        """
        self.init()
        return True
