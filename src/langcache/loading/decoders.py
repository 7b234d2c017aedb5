"""Translation source decoders.

Decoders turn a source file into a nested, insertion-ordered translation tree.
They are looked up by lower-cased file extension in a DecoderRegistry; an
extension without a registered decoder fails explicitly with
UnsupportedFormatError instead of probing for parser availability at load time.

Built-in decoders:
    ini, properties - configparser, sections become nested mappings
    json            - json, objects become nested mappings
    yml, yaml       - PyYAML safe_load (registered only when PyYAML is installed)

Leaf policy:
    Decoded leaves are normalized to strings: str is kept, bool becomes
    "true"/"false", int/float use str(), None becomes "", dates use
    isoformat(). Lists become sections keyed by index ("0", "1", ...).
    Anything else is rejected with SourceFormatError.

Python 3.13+.
"""

from __future__ import annotations

import configparser
import json
import logging
from collections.abc import Callable, Iterator, Mapping
from datetime import date
from pathlib import Path

from langcache.core.compat import is_yaml_available, require_yaml
from langcache.core.depth_guard import DepthGuard
from langcache.errors import SourceFormatError, UnsupportedFormatError
from langcache.types import TranslationTree, TranslationValue

__all__ = [
    "Decoder",
    "DecoderRegistry",
    "decode_ini",
    "decode_json",
    "decode_yaml",
    "file_extension",
    "load_translation_file",
    "normalize_tree",
]

logger = logging.getLogger(__name__)

type Decoder = Callable[[Path], Mapping[object, object]]
"""Callable decoding a file into a (not yet normalized) nested mapping."""

# Section names that cannot collide with anything written in a real file.
_INI_ROOT_SECTION = "\x00root"
_INI_DEFAULT_SECTION = "\x00default"

_QUOTES = ('"', "'")


def _read_text(path: Path) -> str:
    # utf-8-sig drops a leading BOM written by some editors
    return path.read_text(encoding="utf-8-sig")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def _strip_inline_comment(value: str) -> str:
    value = value.strip()
    if value[:1] in _QUOTES:
        end = value.find(value[0], 1)
        if end != -1:
            return value[: end + 1]
    return value.split(";", 1)[0].rstrip()


def _prepare_ini_line(line: str) -> str:
    # Indented lines are keys of their own, never value continuations
    line = line.strip()
    if not line or line[0] in "#;[" or "=" not in line:
        return line
    key, _, value = line.partition("=")
    return f"{key.rstrip()} = {_strip_inline_comment(value)}"


def decode_ini(path: Path) -> TranslationTree:
    """Decode an INI / .properties file.

    Keys before the first ``[section]`` header become top-level leaves; each
    section becomes a nested mapping. Key case is preserved and indentation
    is ignored. ``;`` and ``#`` start full-line comments, and an unquoted
    ``;`` ends a value. Values wrapped in matching quotes are unquoted and
    keep any ``;`` inside the quotes. A repeated key or section keeps the
    last value.

    Raises:
        SourceFormatError: If the file is not valid INI syntax
    """
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        delimiters=("=",),
        comment_prefixes=(";", "#"),
        default_section=_INI_DEFAULT_SECTION,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]

    # A synthetic leading section captures keys written before any header
    lines = (_prepare_ini_line(line) for line in _read_text(path).splitlines())
    text = "\n".join([f"[{_INI_ROOT_SECTION}]", *lines])
    try:
        parser.read_string(text, source=str(path))
    except configparser.Error as e:
        raise SourceFormatError(f"invalid INI syntax: {e}", path) from e

    tree: TranslationTree = {}
    for section_name in parser.sections():
        section = {
            key: _unquote(value or "")
            for key, value in parser.items(section_name, raw=True)
        }
        if section_name == _INI_ROOT_SECTION:
            tree.update(section)
        else:
            tree[section_name] = section  # type: ignore[assignment]
    return tree


def decode_json(path: Path) -> Mapping[object, object]:
    """Decode a JSON file whose top level is an object.

    Raises:
        SourceFormatError: If the file is not valid JSON or not an object
    """
    try:
        data = json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise SourceFormatError(f"invalid JSON: {e}", path) from e
    if not isinstance(data, dict):
        raise SourceFormatError(
            f"top level must be an object, got {type(data).__name__}", path
        )
    return data


def decode_yaml(path: Path) -> Mapping[object, object]:
    """Decode a YAML file whose top level is a mapping.

    An empty document decodes to an empty tree.

    Raises:
        OptionalDependencyError: If PyYAML is not installed
        SourceFormatError: If the file is not valid YAML or not a mapping
    """
    require_yaml("decode_yaml")
    import yaml  # noqa: PLC0415

    try:
        data = yaml.safe_load(_read_text(path))
    except yaml.YAMLError as e:
        raise SourceFormatError(f"invalid YAML: {e}", path) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SourceFormatError(
            f"top level must be a mapping, got {type(data).__name__}", path
        )
    return data


def _normalize_scalar(value: object, path: Path | None) -> str:
    match value:
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case int() | float():
            return str(value)
        case None:
            return ""
        case date():
            return value.isoformat()
        case _:
            raise SourceFormatError(
                f"unsupported value of type {type(value).__name__}: {value!r}", path
            )


def _normalize_value(value: object, path: Path | None, guard: DepthGuard) -> TranslationValue:
    if isinstance(value, Mapping):
        with guard:
            return {
                _normalize_scalar(key, path): _normalize_value(item, path, guard)
                for key, item in value.items()
            }
    if isinstance(value, (list, tuple)):
        with guard:
            return {
                str(index): _normalize_value(item, path, guard)
                for index, item in enumerate(value)
            }
    return _normalize_scalar(value, path)


def normalize_tree(data: Mapping[object, object], path: Path | None = None) -> TranslationTree:
    """Normalize decoded data into a translation tree with string leaves.

    Args:
        data: Decoded top-level mapping
        path: Source file, used in error messages only

    Returns:
        New translation tree; key order is preserved

    Raises:
        SourceFormatError: If a leaf has an unsupported type
        DepthLimitExceededError: If nesting exceeds MAX_DEPTH
    """
    guard = DepthGuard()
    with guard:
        return {
            _normalize_scalar(key, path): _normalize_value(item, path, guard)
            for key, item in data.items()
        }


class DecoderRegistry:
    """Extension -> decoder lookup table.

    Extensions are stored lower-cased without the leading dot.

    Example:
        >>> registry = DecoderRegistry.default()
        >>> "ini" in registry
        True
        >>> registry.register("toml", my_toml_decoder)
    """

    __slots__ = ("_decoders",)

    def __init__(self) -> None:
        """Create an empty registry."""
        self._decoders: dict[str, Decoder] = {}

    @classmethod
    def default(cls) -> DecoderRegistry:
        """Create a registry with the built-in decoders.

        YAML extensions are only registered when PyYAML is importable, so a
        YAML source without PyYAML fails with UnsupportedFormatError.
        """
        registry = cls()
        registry.register("ini", decode_ini)
        registry.register("properties", decode_ini)
        registry.register("json", decode_json)
        if is_yaml_available():
            registry.register("yml", decode_yaml)
            registry.register("yaml", decode_yaml)
        else:
            logger.debug("PyYAML not installed; YAML sources are unsupported")
        return registry

    @staticmethod
    def _key(extension: str) -> str:
        return extension.lower().lstrip(".")

    def register(self, extension: str, decoder: Decoder) -> None:
        """Register (or replace) the decoder for an extension.

        Raises:
            ValueError: If extension is empty
        """
        key = self._key(extension)
        if not key:
            msg = "Decoder extension cannot be empty"
            raise ValueError(msg)
        self._decoders[key] = decoder

    def unregister(self, extension: str) -> None:
        """Remove the decoder for an extension, if registered."""
        self._decoders.pop(self._key(extension), None)

    def get_decoder(self, extension: str) -> Decoder | None:
        """Return the decoder for an extension, or None if not registered."""
        return self._decoders.get(self._key(extension))

    def list_extensions(self) -> list[str]:
        """List registered extensions in registration order."""
        return list(self._decoders)

    def copy(self) -> DecoderRegistry:
        """Create a shallow copy of this registry."""
        new = DecoderRegistry()
        new._decoders = dict(self._decoders)
        return new

    def __contains__(self, extension: str) -> bool:
        """Check if an extension has a decoder."""
        return self._key(extension) in self._decoders

    def __iter__(self) -> Iterator[str]:
        """Iterate over registered extensions."""
        return iter(self._decoders)

    def __len__(self) -> int:
        """Number of registered extensions."""
        return len(self._decoders)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"DecoderRegistry(extensions={self.list_extensions()!r})"


def file_extension(path: Path) -> str:
    """Return the lower-cased extension of path without the dot ('' if none)."""
    return path.suffix.lower().lstrip(".")


def load_translation_file(
    path: Path | str, registry: DecoderRegistry | None = None
) -> TranslationTree:
    """Decode a translation source file into a normalized translation tree.

    Args:
        path: Source file
        registry: Decoders to dispatch on; defaults to DecoderRegistry.default()

    Returns:
        Translation tree with string leaves

    Raises:
        UnsupportedFormatError: If no decoder is registered for the extension
        SourceFormatError: If the file cannot be decoded
        OSError: If the file cannot be read
    """
    path = Path(path)
    if registry is None:
        registry = DecoderRegistry.default()

    extension = file_extension(path)
    decoder = registry.get_decoder(extension)
    if decoder is None:
        raise UnsupportedFormatError(extension, path)

    logger.debug("Decoding %s with %s decoder", path, extension)
    return normalize_tree(decoder(path), path)
