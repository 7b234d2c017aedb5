"""Shared constants for langcache.

Centralizes defaults and limits used across the resolution, loading,
compilation and cache layers. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Loader defaults: Values applied when an option is not configured
- Signal names: Keys read from request signal sources
- Cache format: On-disk record identity
- Depth limits: Recursion protection for tree merging/compilation

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Loader defaults
    "DEFAULT_FILE_PATH",
    "DEFAULT_CACHE_PATH",
    "DEFAULT_FALLBACK_LANG",
    "DEFAULT_PREFIX",
    "DEFAULT_SECTION_SEPARATOR",
    "LANGUAGE_PLACEHOLDER",
    # Signal names
    "LANG_PARAMETER",
    "ACCEPT_LANGUAGE_HEADER",
    "ACCEPT_LANGUAGE_CODE_LENGTH",
    # Cache format
    "CACHE_FILE_PREFIX",
    "CACHE_FILE_SUFFIX",
    "CACHE_FORMAT_VERSION",
    "CACHE_NAME_SEPARATOR",
    "CACHE_FILE_MODE",
    "CACHE_DIR_MODE",
    # Depth limits
    "MAX_DEPTH",
]

# ============================================================================
# LOADER DEFAULTS
# ============================================================================

# Token substituted with a candidate language code in the file path template.
LANGUAGE_PLACEHOLDER: str = "{LANGUAGE}"

DEFAULT_FILE_PATH: str = "./lang/lang_{LANGUAGE}.ini"
DEFAULT_CACHE_PATH: str = "./langcache/"
DEFAULT_FALLBACK_LANG: str = "en"

# Name under which the compiled catalog is activated (e.g. L.greeting).
DEFAULT_PREFIX: str = "L"

# Joins section names and keys: [welcomepage] greeting -> welcomepage_greeting
DEFAULT_SECTION_SEPARATOR: str = "_"

# ============================================================================
# SIGNAL NAMES
# ============================================================================

# Key looked up in query string, session and cookie sources.
LANG_PARAMETER: str = "lang"

ACCEPT_LANGUAGE_HEADER: str = "Accept-Language"

# Each Accept-Language entry contributes only its primary language subtag.
# "de-DE,de-CH;q=0.8" -> ["de", "de"]
ACCEPT_LANGUAGE_CODE_LENGTH: int = 2

# ============================================================================
# CACHE FORMAT
# ============================================================================

CACHE_FILE_PREFIX: str = "langcache"
CACHE_FILE_SUFFIX: str = ".cache.json"
CACHE_NAME_SEPARATOR: str = "_"

# Bump when the on-disk record layout changes; older records become stale.
CACHE_FORMAT_VERSION: int = 1

# Cache records must stay readable by every process consuming them.
CACHE_FILE_MODE: int = 0o644
CACHE_DIR_MODE: int = 0o755

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum section nesting in a translation tree.
# Real translation files rarely exceed 3-4 levels; anything beyond 100 is
# malformed or adversarial input and would approach the recursion limit.
MAX_DEPTH: int = 100
