"""Runtime accessor for an activated translation namespace.

A Translations catalog is a read-only mapping from qualified name to literal,
with three access styles:

    L["greeting"]                 mapping lookup
    L.greeting                    attribute lookup
    L("welcome", ["Anna"])        lookup with positional substitution

Positional substitution follows Python's own string formatting: a literal
containing ``%`` conversions is formatted with the ``%`` operator
(``"Hello %s"``), any other literal with ``str.format`` positional fields
(``"Hello {}"`` / ``"Hello {0}"``).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING

from langcache.errors import TranslationFormatError, UnknownTranslationKeyError
from langcache.types import LanguageCode, QualifiedName

if TYPE_CHECKING:
    from langcache.compiler import CompiledArtifact

__all__ = ["Translations", "format_literal"]

logger = logging.getLogger(__name__)

# printf-style conversion: %s, %d, %05.2f, %-10s, %%, ...
_PERCENT_CONVERSION: re.Pattern[str] = re.compile(
    r"%[-+ #0]*(?:\*|\d+)?(?:\.(?:\*|\d+))?[diouxXeEfFgGcrsa%]"
)


def format_literal(name: QualifiedName, literal: str, args: Sequence[object]) -> str:
    """Substitute positional arguments into a literal.

    Args:
        name: Qualified name (used in error messages)
        literal: Compiled literal
        args: Positional arguments

    Returns:
        Formatted string

    Raises:
        TranslationFormatError: If the arguments do not fit the literal

    Example:
        >>> format_literal("welcome", "Hello %s, you have %d messages", ["Anna", 3])
        'Hello Anna, you have 3 messages'
        >>> format_literal("welcome", "Hello {}!", ["Anna"])
        'Hello Anna!'
    """
    try:
        if _PERCENT_CONVERSION.search(literal):
            return literal % tuple(args)
        return literal.format(*args)
    except (TypeError, ValueError, IndexError, KeyError) as e:
        raise TranslationFormatError(name, str(e)) from e


class Translations(Mapping[QualifiedName, str]):
    """Read-only catalog of compiled translations.

    Instances are created from a CompiledArtifact and never change after
    construction.

    Attribute lookup (``L.greeting``) only reaches translations whose name
    is not already an attribute of the class. Names such as ``get``,
    ``items``, ``keys``, ``values``, ``prefix`` or ``language`` resolve to
    the catalog's own members; use ``L["items"]`` or ``L("items")`` for them.

    Attributes:
        prefix: Namespace name the catalog is activated under
        language: Applied language the catalog was compiled from
    """

    __slots__ = ("_language", "_messages", "_prefix")

    def __init__(
        self,
        messages: Mapping[QualifiedName, str],
        *,
        prefix: str,
        language: LanguageCode,
    ) -> None:
        """Create a catalog.

        Args:
            messages: Qualified name -> literal mapping (copied)
            prefix: Namespace name
            language: Applied language code
        """
        self._messages: dict[QualifiedName, str] = dict(messages)
        self._prefix = prefix
        self._language = language

    @classmethod
    def from_artifact(cls, artifact: CompiledArtifact) -> Translations:
        """Create a catalog from a compiled artifact."""
        return cls(artifact.messages, prefix=artifact.prefix, language=artifact.language)

    @property
    def prefix(self) -> str:
        """Namespace name (e.g. 'L')."""
        return self._prefix

    @property
    def language(self) -> LanguageCode:
        """Applied language code."""
        return self._language

    def __getitem__(self, name: QualifiedName) -> str:
        """Return the literal for a qualified name.

        Raises:
            UnknownTranslationKeyError: If name is not in the catalog
        """
        try:
            return self._messages[name]
        except KeyError:
            raise UnknownTranslationKeyError(name, self._prefix) from None

    def __iter__(self) -> Iterator[QualifiedName]:
        """Iterate over qualified names in compilation order."""
        return iter(self._messages)

    def __len__(self) -> int:
        """Number of translations."""
        return len(self._messages)

    def __contains__(self, name: object) -> bool:
        """Check if a qualified name exists."""
        return name in self._messages

    def __getattr__(self, name: str) -> str:
        """Attribute-style lookup: ``L.greeting``.

        Raises:
            AttributeError: If name is not in the catalog
        """
        # Dunder probes (copy, pickle, ...) and unset slots must behave like a plain object
        if name.startswith("__") or name in Translations.__slots__:
            raise AttributeError(name)
        try:
            return self[name]
        except UnknownTranslationKeyError as e:
            raise AttributeError(str(e), name=name, obj=self) from e

    def __call__(self, name: QualifiedName, args: Sequence[object] | None = None) -> str:
        """Look up a literal and optionally substitute positional arguments.

        Args:
            name: Qualified name
            args: Positional arguments; None returns the literal unchanged

        Raises:
            UnknownTranslationKeyError: If name is not in the catalog
            TranslationFormatError: If args do not fit the literal
        """
        literal = self[name]
        if args is None:
            return literal
        if isinstance(args, (str, bytes)):
            args = (args,)
        return format_literal(name, literal, args)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"Translations(prefix={self._prefix!r}, language={self._language!r}, "
            f"size={len(self._messages)})"
        )
