"""Fallback language merging.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from langcache.core.depth_guard import DepthGuard
from langcache.types import TranslationTree

__all__ = ["merge_fallback"]


def _merge(primary: TranslationTree, fallback: TranslationTree, guard: DepthGuard) -> TranslationTree:
    with guard:
        merged: TranslationTree = {}
        for key, fallback_value in fallback.items():
            if key not in primary:
                merged[key] = _copy(fallback_value, guard)
                continue
            primary_value = primary[key]
            if isinstance(primary_value, dict) and isinstance(fallback_value, dict):
                merged[key] = _merge(primary_value, fallback_value, guard)
            else:
                merged[key] = _copy(primary_value, guard)
        for key, primary_value in primary.items():
            if key not in merged:
                merged[key] = _copy(primary_value, guard)
        return merged


def _copy(value: str | TranslationTree, guard: DepthGuard) -> str | TranslationTree:
    if isinstance(value, dict):
        with guard:
            return {key: _copy(item, guard) for key, item in value.items()}
    return value


def merge_fallback(primary: TranslationTree, fallback: TranslationTree) -> TranslationTree:
    """Deep-merge the fallback tree under the primary tree.

    For a key present in both trees: when both values are sections they are
    merged recursively, otherwise the primary value wins. Keys only in the
    fallback are copied in; keys only in the primary are kept. Key order
    follows the fallback tree, followed by primary-only keys in primary order.

    Neither input is mutated.

    Args:
        primary: Tree of the applied language
        fallback: Tree of the fallback language

    Returns:
        New merged tree

    Raises:
        DepthLimitExceededError: If nesting exceeds MAX_DEPTH

    Example:
        >>> merge_fallback({"a": "1"}, {"a": "2", "b": "3"})
        {'a': '1', 'b': '3'}
    """
    return _merge(primary, fallback, DepthGuard())
