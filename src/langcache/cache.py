"""On-disk cache of compiled translation artifacts.

A cache record is a JSON document named after a fingerprint of everything
that determines its identity:

    {cache_path}/langcache_{marker}_[{static_map_hash}_]{prefix}_{language}.cache.json

    marker          - digest of the cache format version and package version
    static_map_hash - md5 of the sorted static map (omitted when empty)
    prefix          - namespace prefix
    language        - applied language

A record is stale when it does not exist or is older than the source file
(or, when merging, older than the fallback file). Records are written to a
temporary file in the cache directory and renamed into place, so readers
never observe a partially written record.

Record layout:
    {
        "format": 1,
        "implementation": "<marker>",
        "fingerprint": "<fingerprint>",
        "prefix": "L",
        "language": "en",
        "section_separator": "_",
        "merge_fallback": false,
        "fallback_lang": "en",
        "checksum": "<sha256 of messages>",
        "messages": {"greeting": "Hello World!", ...}
    }

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

from langcache._version import __version__
from langcache.compiler import CompiledArtifact, messages_checksum
from langcache.constants import (
    CACHE_DIR_MODE,
    CACHE_FILE_MODE,
    CACHE_FILE_PREFIX,
    CACHE_FILE_SUFFIX,
    CACHE_FORMAT_VERSION,
    CACHE_NAME_SEPARATOR,
)
from langcache.errors import CacheCorruptionError, WriteError
from langcache.types import LanguageCode, StaticMap

if TYPE_CHECKING:
    from langcache.config import LoaderConfig

__all__ = [
    "artifact_to_record",
    "cache_file_path",
    "fingerprint",
    "implementation_marker",
    "is_stale",
    "read_artifact",
    "record_to_artifact",
    "static_map_hash",
    "write_artifact",
]

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def implementation_marker() -> str:
    """Digest identifying the code that produced a cache record.

    Changes whenever the record format or the package version changes, so
    upgrades never reuse records written by another release.
    """
    identity = f"{CACHE_FORMAT_VERSION}:{__version__}".encode()
    return hashlib.sha256(identity).hexdigest()[:16]


def static_map_hash(static_map: StaticMap) -> str | None:
    """Hash a static map independently of its insertion order.

    Entries are hashed as ``placeholder + value`` in ascending placeholder
    order.

    Returns:
        md5 hex digest, or None for an empty map

    Example:
        >>> static_map_hash({}) is None
        True
        >>> static_map_hash({"B": "2", "A": "1"}) == static_map_hash({"A": "1", "B": "2"})
        True
    """
    if not static_map:
        return None
    digest = hashlib.md5(usedforsecurity=False)
    for placeholder in sorted(static_map):
        digest.update((placeholder + static_map[placeholder]).encode("utf-8"))
    return digest.hexdigest()


def fingerprint(config: LoaderConfig, language: LanguageCode) -> str:
    """Compose the cache fingerprint for a configuration and applied language."""
    parts = [implementation_marker()]
    smap_hash = static_map_hash(config.static_map)
    if smap_hash is not None:
        parts.append(smap_hash)
    parts.extend((config.prefix, language))
    return CACHE_NAME_SEPARATOR.join(parts)


def cache_file_path(config: LoaderConfig, language: LanguageCode) -> Path:
    """Return the cache record path for a configuration and applied language."""
    name = f"{CACHE_FILE_PREFIX}{CACHE_NAME_SEPARATOR}{fingerprint(config, language)}{CACHE_FILE_SUFFIX}"
    return Path(config.cache_path) / name


def is_stale(
    cache_file: Path | str,
    source_file: Path | str,
    fallback_file: Path | str | None = None,
) -> bool:
    """Decide whether a cache record must be rebuilt.

    Args:
        cache_file: Cache record path
        source_file: Source file of the applied language
        fallback_file: Source file of the fallback language; pass it only
            when fallback merging is enabled

    Returns:
        True if the record is missing or older than any given source file
    """
    try:
        cache_mtime = os.stat(cache_file).st_mtime_ns
    except (FileNotFoundError, NotADirectoryError):
        return True
    if cache_mtime < os.stat(source_file).st_mtime_ns:
        return True
    return fallback_file is not None and cache_mtime < os.stat(fallback_file).st_mtime_ns


def artifact_to_record(artifact: CompiledArtifact) -> dict[str, object]:
    """Serialize an artifact into its JSON record."""
    return {
        "format": CACHE_FORMAT_VERSION,
        "implementation": implementation_marker(),
        "fingerprint": artifact.fingerprint,
        "prefix": artifact.prefix,
        "language": artifact.language,
        "section_separator": artifact.section_separator,
        "merge_fallback": artifact.merge_fallback,
        "fallback_lang": artifact.fallback_lang,
        "checksum": artifact.checksum,
        "messages": dict(artifact.messages),
    }


def _require[T](record: dict[str, object], key: str, kind: type[T], path: Path) -> T:
    value = record.get(key)
    if not isinstance(value, kind):
        msg = f"Cache record field '{key}' is missing or not a {kind.__name__}"
        raise CacheCorruptionError(msg, path)
    return value


def record_to_artifact(record: object, path: Path) -> CompiledArtifact:
    """Rebuild and verify an artifact from a decoded JSON record.

    Raises:
        CacheCorruptionError: If the record has the wrong format version,
            missing fields, non-string messages or a checksum mismatch
    """
    if not isinstance(record, dict):
        msg = "Cache record is not a JSON object"
        raise CacheCorruptionError(msg, path)

    version = record.get("format")
    if version != CACHE_FORMAT_VERSION:
        raise CacheCorruptionError(
            "Unsupported cache record format",
            path,
            expected=str(CACHE_FORMAT_VERSION),
            actual=str(version),
        )

    messages = _require(record, "messages", dict, path)
    for name, literal in messages.items():
        if not isinstance(literal, str):
            msg = f"Cache record message '{name}' is not a string"
            raise CacheCorruptionError(msg, path)

    stored_checksum = _require(record, "checksum", str, path)
    actual_checksum = messages_checksum(messages)
    if stored_checksum != actual_checksum:
        raise CacheCorruptionError(
            "Cache record checksum mismatch",
            path,
            expected=stored_checksum,
            actual=actual_checksum,
        )

    return CompiledArtifact(
        messages=messages,
        language=_require(record, "language", str, path),
        prefix=_require(record, "prefix", str, path),
        fingerprint=_require(record, "fingerprint", str, path),
        section_separator=_require(record, "section_separator", str, path),
        merge_fallback=_require(record, "merge_fallback", bool, path),
        fallback_lang=_require(record, "fallback_lang", str, path),
        checksum=stored_checksum,
    )


def read_artifact(path: Path | str) -> CompiledArtifact:
    """Load and verify a cache record.

    Raises:
        CacheCorruptionError: If the record cannot be read, decoded or verified
    """
    path = Path(path)
    try:
        record = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CacheCorruptionError(f"Cannot read cache record: {e}", path) from e
    artifact = record_to_artifact(record, path)
    logger.debug("Read %d cached translations from %s", len(artifact.messages), path)
    return artifact


def write_artifact(artifact: CompiledArtifact, path: Path | str) -> None:
    """Persist an artifact atomically.

    Creates the cache directory (with parents) if needed, writes the record
    to a temporary sibling file and renames it over ``path``. The record is
    made world-readable so every consuming process can load it.

    Raises:
        WriteError: If the directory or file cannot be created or written
    """
    path = Path(path)
    directory = path.parent
    try:
        directory.mkdir(mode=CACHE_DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Could not create cache directory '{directory}': {e}"
        raise WriteError(msg, directory) from e

    payload = json.dumps(artifact_to_record(artifact), ensure_ascii=False, indent=1)
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=directory,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
        os.chmod(tmp_name, CACHE_FILE_MODE)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        msg = f"Could not write cache file to path '{path}'. Is it writable? ({e})"
        raise WriteError(msg, path) from e

    logger.info("Wrote cache record %s (%d translations)", path, len(artifact.messages))
