"""langcache - compiled, cached translation catalogs.

Resolves the user's preferred language from request signals, loads the
matching INI / JSON / YAML translation file, compiles it once into a flat
namespace of validated identifiers and caches the result on disk. Later
initializations reuse the cache until a source file changes.

Public API:
    I18n - Loader facade (configure, then init()/finish_setup())
    LoaderConfig - Immutable loader configuration
    RequestSignals - Query/session/header/cookie language signals
    Translations - Read-only catalog of compiled translations
    translate - Look up a translation in an activated namespace

Exceptions:
    I18nError - Base exception class
    ConfigurationError, AlreadyInitializedError - Configuration problems
    NoLanguageFileFoundError - No candidate language has a source file
    UnsupportedFormatError, SourceFormatError - Source decoding problems
    InvalidIdentifierError - Compiled key is not a valid identifier
    WriteError, CacheCorruptionError - Cache problems
    UnknownTranslationKeyError, TranslationFormatError - Lookup problems

Submodules:
    langcache.resolution - Signal collection and source file resolution
    langcache.loading - Decoder registry and fallback merging
    langcache.compiler - Tree flattening and static placeholder substitution
    langcache.cache - Cache fingerprinting, staleness, read/write
    langcache.runtime - Translations catalog and active namespace registry
"""

from ._version import __version__
from .config import LoaderConfig
from .errors import (
    AlreadyInitializedError,
    CacheCorruptionError,
    ConfigurationError,
    DepthLimitExceededError,
    I18nError,
    InvalidIdentifierError,
    NoLanguageFileFoundError,
    SourceFormatError,
    TranslationFormatError,
    UnknownTranslationKeyError,
    UnsupportedFormatError,
    WriteError,
)
from .loader import I18n, InitSummary
from .resolution import RequestSignals
from .runtime import Translations, get_namespace, translate

__all__ = [
    "AlreadyInitializedError",
    "CacheCorruptionError",
    "ConfigurationError",
    "DepthLimitExceededError",
    "I18n",
    "I18nError",
    "InitSummary",
    "InvalidIdentifierError",
    "LoaderConfig",
    "NoLanguageFileFoundError",
    "RequestSignals",
    "SourceFormatError",
    "TranslationFormatError",
    "Translations",
    "UnknownTranslationKeyError",
    "UnsupportedFormatError",
    "WriteError",
    "__version__",
    "get_namespace",
    "translate",
]
