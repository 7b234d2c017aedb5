"""Translation tree compilation.

Flattens a nested translation tree into a flat namespace of qualified names,
validating every name against the identifier grammar and substituting static
placeholders into every literal. Compilation is deterministic: identical input
trees and options always produce identical output, in source order.

Qualified names:
    [welcomepage]          section path accumulates "welcomepage" + separator
    greeting = Hello  ->   welcomepage_greeting = "Hello"

Static placeholders:
    static_map {"TYPE": "Favorite"} turns "My {TYPE} string" into
    "My Favorite string". All placeholders are replaced in a single pass, so
    replacement text that itself looks like a placeholder is never expanded.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import hashlib
import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from langcache.core.depth_guard import DepthGuard
from langcache.core.identifier_validation import is_valid_identifier
from langcache.errors import InvalidIdentifierError
from langcache.types import LanguageCode, QualifiedName, StaticMap, TranslationTree

if TYPE_CHECKING:
    from langcache.config import LoaderConfig

__all__ = [
    "CompiledArtifact",
    "StaticReplacer",
    "compile_artifact",
    "compile_tree",
    "messages_checksum",
]

logger = logging.getLogger(__name__)


class StaticReplacer:
    """Single-pass literal replacement of ``{placeholder}`` tokens.

    Longer tokens come first in the alternation. Replacement text is never
    scanned again.

    Example:
        >>> StaticReplacer({"TYPE": "Favorite"}).apply("My {TYPE} string")
        'My Favorite string'
    """

    __slots__ = ("_pattern", "_replacements")

    def __init__(self, static_map: StaticMap) -> None:
        """Build the replacement pattern for a static map."""
        self._replacements: dict[str, str] = {
            f"{{{placeholder}}}": value for placeholder, value in static_map.items()
        }
        self._pattern: re.Pattern[str] | None = None
        if self._replacements:
            tokens = sorted(self._replacements, key=len, reverse=True)
            self._pattern = re.compile("|".join(re.escape(token) for token in tokens))

    def apply(self, literal: str) -> str:
        """Return literal with every known placeholder replaced."""
        if self._pattern is None:
            return literal
        return self._pattern.sub(lambda m: self._replacements[m.group(0)], literal)


def _walk(
    tree: TranslationTree,
    current_prefix: str,
    separator: str,
    replacer: StaticReplacer,
    out: dict[QualifiedName, str],
    guard: DepthGuard,
) -> None:
    with guard:
        for key, value in tree.items():
            if isinstance(value, dict):
                _walk(value, current_prefix + key + separator, separator, replacer, out, guard)
                continue
            name = current_prefix + key
            if not is_valid_identifier(name):
                raise InvalidIdentifierError(name)
            # Later duplicates overwrite earlier ones
            out[name] = replacer.apply(value)


def compile_tree(
    tree: TranslationTree,
    *,
    static_map: StaticMap | None = None,
    section_separator: str = "_",
    key_prefix: str = "",
) -> dict[QualifiedName, str]:
    """Flatten a translation tree into qualified name -> literal pairs.

    Traversal is depth-first in insertion order. Sections extend the current
    prefix by ``key + section_separator``; leaves are emitted as
    ``current_prefix + key``.

    Args:
        tree: Nested translation tree with string leaves
        static_map: Placeholder -> replacement applied to every literal
        section_separator: Joins section names and keys
        key_prefix: Prefix for every qualified name (default: none)

    Returns:
        Flat, insertion-ordered mapping

    Raises:
        InvalidIdentifierError: If a qualified name fails the identifier grammar
        DepthLimitExceededError: If nesting exceeds MAX_DEPTH

    Example:
        >>> compile_tree(
        ...     {"greeting": "Hello World!", "category": {"somethingother": "Something other..."}}
        ... )
        {'greeting': 'Hello World!', 'category_somethingother': 'Something other...'}
    """
    out: dict[QualifiedName, str] = {}
    replacer = StaticReplacer(static_map or {})
    _walk(tree, key_prefix, section_separator, replacer, out, DepthGuard())
    return out


def messages_checksum(messages: Mapping[QualifiedName, str]) -> str:
    """SHA-256 over the ordered (name, literal) pairs of a compiled namespace."""
    payload = json.dumps(list(messages.items()), ensure_ascii=False, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


@dataclass(frozen=True, slots=True)
class CompiledArtifact:
    """A compiled, activatable translation namespace.

    Attributes:
        messages: Read-only qualified name -> literal mapping
        language: Applied language the messages were compiled from
        prefix: Name the catalog is activated under
        fingerprint: Cache fingerprint the artifact is stored under
        section_separator: Separator used when compiling
        merge_fallback: Whether the fallback language was merged in
        fallback_lang: Fallback language at compile time
        checksum: SHA-256 of messages (see messages_checksum)
    """

    messages: Mapping[QualifiedName, str]
    language: LanguageCode
    prefix: str
    fingerprint: str
    section_separator: str
    merge_fallback: bool
    fallback_lang: LanguageCode
    checksum: str = field(default="")

    def __post_init__(self) -> None:
        """Freeze messages and compute the checksum if not supplied."""
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))
        if not self.checksum:
            object.__setattr__(self, "checksum", messages_checksum(self.messages))

    def __len__(self) -> int:
        """Number of compiled messages."""
        return len(self.messages)

    def matches(self, config: LoaderConfig) -> bool:
        """Check whether the artifact was compiled with config's options.

        The fingerprint covers prefix, language and static map; this covers
        the remaining options that change compiled output.
        """
        return (
            self.prefix == config.prefix
            and self.section_separator == config.section_separator
            and self.merge_fallback == config.merge_fallback
            and (not self.merge_fallback or self.fallback_lang == config.fallback_lang)
        )


def compile_artifact(
    tree: TranslationTree,
    config: LoaderConfig,
    language: LanguageCode,
    fingerprint: str,
) -> CompiledArtifact:
    """Compile a tree with a configuration's options into a CompiledArtifact.

    Raises:
        InvalidIdentifierError: If a qualified name fails the identifier grammar
    """
    messages = compile_tree(
        tree,
        static_map=config.static_map,
        section_separator=config.section_separator,
    )
    logger.info(
        "Compiled %d translations for language '%s' (prefix %s)",
        len(messages),
        language,
        config.prefix,
    )
    return CompiledArtifact(
        messages=messages,
        language=language,
        prefix=config.prefix,
        fingerprint=fingerprint,
        section_separator=config.section_separator,
        merge_fallback=config.merge_fallback,
        fallback_lang=config.fallback_lang,
    )
