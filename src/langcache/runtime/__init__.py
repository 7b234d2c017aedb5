"""Runtime access to compiled translations.

Submodules:
    catalog   - Translations read-only catalog and positional formatting
    namespace - Process-wide registry of activated catalogs

Python 3.13+. Zero external dependencies.
"""

from langcache.runtime.catalog import Translations, format_literal
from langcache.runtime.namespace import (
    activate,
    active_prefixes,
    clear_namespaces,
    deactivate,
    get_namespace,
    translate,
)

__all__ = [
    "Translations",
    "activate",
    "active_prefixes",
    "clear_namespaces",
    "deactivate",
    "format_literal",
    "get_namespace",
    "translate",
]
