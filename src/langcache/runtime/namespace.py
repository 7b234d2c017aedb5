"""Process-wide registry of activated translation catalogs.

Activation publishes a compiled artifact under its prefix so any module can
look translations up without holding a reference to the loader:

    from langcache.runtime.namespace import translate
    translate("L", "greeting")

Activated catalogs are immutable. Activating the same prefix again replaces
the previous catalog (logged as a warning); loaders never do this on their
own because initialization runs once per loader.

Thread Safety:
    Registry mutations and reads are serialized by a module-level lock.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import TYPE_CHECKING

from langcache.errors import UnknownTranslationKeyError
from langcache.runtime.catalog import Translations

if TYPE_CHECKING:
    from langcache.compiler import CompiledArtifact

__all__ = [
    "activate",
    "active_prefixes",
    "clear_namespaces",
    "deactivate",
    "get_namespace",
    "translate",
]

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_namespaces: dict[str, Translations] = {}


def activate(artifact: CompiledArtifact) -> Translations:
    """Publish a compiled artifact under its prefix.

    Args:
        artifact: Compiled artifact to activate

    Returns:
        The activated catalog
    """
    catalog = Translations.from_artifact(artifact)
    with _lock:
        previous = _namespaces.get(catalog.prefix)
        _namespaces[catalog.prefix] = catalog
    if previous is not None:
        logger.warning(
            "Namespace '%s' re-activated: language '%s' replaces '%s'",
            catalog.prefix,
            catalog.language,
            previous.language,
        )
    logger.info(
        "Activated namespace '%s' (%s, %d translations)",
        catalog.prefix,
        catalog.language,
        len(catalog),
    )
    return catalog


def get_namespace(prefix: str) -> Translations | None:
    """Return the catalog activated under prefix, or None."""
    with _lock:
        return _namespaces.get(prefix)


def translate(prefix: str, name: str, args: Sequence[object] | None = None) -> str:
    """Look up ``{prefix}::{name}`` in the active namespace.

    Raises:
        UnknownTranslationKeyError: If no catalog is active under prefix or
            the name is unknown
        TranslationFormatError: If args do not fit the literal
    """
    catalog = get_namespace(prefix)
    if catalog is None:
        raise UnknownTranslationKeyError(name, prefix)
    return catalog(name, args)


def deactivate(prefix: str) -> bool:
    """Remove the catalog activated under prefix.

    Returns:
        True if a catalog was removed
    """
    with _lock:
        return _namespaces.pop(prefix, None) is not None


def active_prefixes() -> tuple[str, ...]:
    """Prefixes with an active catalog, in activation order."""
    with _lock:
        return tuple(_namespaces)


def clear_namespaces() -> None:
    """Remove every active catalog."""
    with _lock:
        _namespaces.clear()
