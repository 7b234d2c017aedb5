"""Type aliases for the translation domain.

Provides semantic type aliases used throughout the package and by user code
when annotating loader call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "LanguageCode",
    "QualifiedName",
    "StaticMap",
    "TranslationTree",
    "TranslationValue",
]

type LanguageCode = str
"""Candidate language code (e.g., 'en', 'de', 'pt_BR')."""

type QualifiedName = str
"""Flattened translation identifier (e.g., 'category_somethingother')."""

type TranslationValue = str | TranslationTree
"""Leaf literal or nested section."""

type TranslationTree = dict[str, TranslationValue]
"""Nested, insertion-ordered mapping decoded from a source file."""

type StaticMap = Mapping[str, str]
"""Placeholder name -> replacement applied to every literal at compile time."""
