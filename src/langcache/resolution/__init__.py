"""Language resolution: which language applies, and where its source lives.

Submodules:
    signals - RequestSignals and the ordered candidate collector
    files   - Path template substitution and first-existing-file resolution

Python 3.13+. Zero external dependencies.
"""

from langcache.resolution.files import (
    ResolvedLanguage,
    language_file_path,
    resolve_language_file,
)
from langcache.resolution.signals import (
    RequestSignals,
    collect_user_langs,
    iter_signal_candidates,
    parse_accept_language,
)

__all__ = [
    "RequestSignals",
    "ResolvedLanguage",
    "collect_user_langs",
    "iter_signal_candidates",
    "language_file_path",
    "parse_accept_language",
    "resolve_language_file",
]
