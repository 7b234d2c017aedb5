"""Source file resolution for candidate languages.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from langcache.constants import LANGUAGE_PLACEHOLDER
from langcache.errors import NoLanguageFileFoundError
from langcache.types import LanguageCode

__all__ = [
    "ResolvedLanguage",
    "language_file_path",
    "resolve_language_file",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedLanguage:
    """The applied language and the source file it was found in.

    Attributes:
        language: Applied language code
        path: Existing source file for that language
    """

    language: LanguageCode
    path: Path


def language_file_path(template: str, language: LanguageCode) -> Path:
    """Substitute a language code into a file path template.

    Every occurrence of ``{LANGUAGE}`` is replaced. ``str.replace`` is used
    rather than ``str.format`` so other braces in the template are left alone.

    Example:
        >>> language_file_path("lang/{LANGUAGE}/lang_{LANGUAGE}.ini", "de").as_posix()
        'lang/de/lang_de.ini'
    """
    return Path(template.replace(LANGUAGE_PLACEHOLDER, language))


def resolve_language_file(
    candidates: Iterable[LanguageCode], template: str
) -> ResolvedLanguage:
    """Find the first candidate whose substituted path is an existing file.

    Candidates are tried strictly in the given order; the first hit wins.

    Args:
        candidates: Language codes, highest priority first
        template: File path template containing ``{LANGUAGE}``

    Returns:
        ResolvedLanguage for the first existing file

    Raises:
        NoLanguageFileFoundError: If no candidate's file exists
    """
    tried: list[LanguageCode] = []
    for language in candidates:
        path = language_file_path(template, language)
        if path.is_file():
            logger.debug("Resolved language '%s' to %s", language, path)
            return ResolvedLanguage(language=language, path=path)
        tried.append(language)
        logger.debug("No language file for '%s' at %s", language, path)

    raise NoLanguageFileFoundError(tuple(tried), template)
