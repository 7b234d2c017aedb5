"""Tests for loading/decoders.py.

Covers the INI, JSON and YAML decoders, leaf normalization, the decoder
registry and extension dispatch in load_translation_file.

Python 3.13+.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from langcache.core.compat import is_yaml_available
from langcache.errors import (
    DepthLimitExceededError,
    SourceFormatError,
    UnsupportedFormatError,
)
from langcache.loading import (
    DecoderRegistry,
    decode_ini,
    file_extension,
    load_translation_file,
    normalize_tree,
)

type WriteSource = Callable[[str, str], Path]

# ============================================================================
# INI
# ============================================================================


class TestDecodeIni:
    """Test the configparser-based INI decoder."""

    def test_sections_become_nested_mappings(self, write_source: WriteSource) -> None:
        """Keys before a header are top level; sections nest."""
        path = write_source(
            "lang_en.ini",
            "greeting = Hello World!\n\n[category]\nsomethingother = Something other...\n",
        )

        assert decode_ini(path) == {
            "greeting": "Hello World!",
            "category": {"somethingother": "Something other..."},
        }

    def test_key_case_preserved(self, write_source: WriteSource) -> None:
        """Keys are not lower-cased."""
        path = write_source("lang_en.ini", "[Menu]\nSaveAs = Save as\n")

        assert decode_ini(path) == {"Menu": {"SaveAs": "Save as"}}

    def test_quoted_values_unquoted(self, write_source: WriteSource) -> None:
        """Matching surrounding quotes are stripped."""
        path = write_source("lang_en.ini", "a = \"quoted value\"\nb = 'single'\nc = \"mixed'\n")

        assert decode_ini(path) == {"a": "quoted value", "b": "single", "c": "\"mixed'"}

    def test_comments_ignored(self, write_source: WriteSource) -> None:
        """Lines starting with ; or # are comments."""
        path = write_source("lang_en.ini", "; comment\n# another\nkey = value\n")

        assert decode_ini(path) == {"key": "value"}

    def test_inline_comment_stripped(self, write_source: WriteSource) -> None:
        """An unquoted ; ends the value."""
        path = write_source(
            "lang_en.ini", "greeting = Hello ; shown on home page\nempty = ; nothing\n"
        )

        assert decode_ini(path) == {"greeting": "Hello", "empty": ""}

    def test_semicolon_inside_quotes_kept(self, write_source: WriteSource) -> None:
        """A quoted value keeps its ; and drops a trailing comment."""
        path = write_source(
            "lang_en.ini", "a = \"one; two\" ; note\nb = 'x;y'\n[s]\nc = \"k;\"\n"
        )

        assert decode_ini(path) == {"a": "one; two", "b": "x;y", "s": {"c": "k;"}}

    def test_indented_key_is_separate(self, write_source: WriteSource) -> None:
        """Indentation does not turn a key into a continuation line."""
        path = write_source(
            "lang_en.ini", "greeting = Hello\n  farewell = Bye\n\n  [menu]\n    open = Open\n"
        )

        assert decode_ini(path) == {
            "greeting": "Hello",
            "farewell": "Bye",
            "menu": {"open": "Open"},
        }

    def test_colon_is_not_a_delimiter(self, write_source: WriteSource) -> None:
        """Only '=' separates key and value, so literals may contain ':'."""
        path = write_source("lang_en.ini", "time = Time: %s\n")

        assert decode_ini(path) == {"time": "Time: %s"}

    def test_percent_not_interpolated(self, write_source: WriteSource) -> None:
        """Interpolation is disabled."""
        path = write_source("lang_en.ini", "rate = 100%(x)s done\n")

        assert decode_ini(path) == {"rate": "100%(x)s done"}

    def test_duplicate_key_keeps_last(self, write_source: WriteSource) -> None:
        """A repeated key keeps the last value."""
        path = write_source("lang_en.ini", "key = first\nkey = second\n")

        assert decode_ini(path) == {"key": "second"}

    def test_bom_is_ignored(self, lang_dir: Path) -> None:
        """A UTF-8 byte order mark does not end up in the first key."""
        path = lang_dir / "lang_en.ini"
        path.write_bytes("\ufeffkey = value\n".encode())

        assert decode_ini(path) == {"key": "value"}

    def test_syntax_error_raises(self, write_source: WriteSource) -> None:
        """A line without a delimiter is a SourceFormatError."""
        path = write_source("lang_en.ini", "not a key value pair\n")

        with pytest.raises(SourceFormatError, match="invalid INI syntax") as exc_info:
            decode_ini(path)

        assert exc_info.value.path == path


# ============================================================================
# JSON / YAML
# ============================================================================


class TestDecodeJson:
    """Test the JSON decoder through load_translation_file."""

    def test_nested_objects(self, write_source: WriteSource) -> None:
        """Objects nest to any depth; key order is kept."""
        path = write_source(
            "lang_en.json", '{"z": "last?", "menu": {"file": {"open": "Open"}}, "a": "A"}'
        )

        tree = load_translation_file(path)

        assert tree == {"z": "last?", "menu": {"file": {"open": "Open"}}, "a": "A"}
        assert list(tree) == ["z", "menu", "a"]

    def test_invalid_json(self, write_source: WriteSource) -> None:
        """Malformed JSON is a SourceFormatError."""
        path = write_source("lang_en.json", '{"a": ')

        with pytest.raises(SourceFormatError, match="invalid JSON"):
            load_translation_file(path)

    def test_top_level_must_be_object(self, write_source: WriteSource) -> None:
        """A JSON array at the top level is rejected."""
        path = write_source("lang_en.json", '["a", "b"]')

        with pytest.raises(SourceFormatError, match="top level must be an object"):
            load_translation_file(path)


@pytest.mark.skipif(not is_yaml_available(), reason="PyYAML not installed")
class TestDecodeYaml:
    """Test the PyYAML decoder."""

    def test_nested_mapping(self, write_source: WriteSource) -> None:
        """YAML mappings nest like INI sections."""
        path = write_source(
            "lang_en.yml", "greeting: Hello\ncategory:\n  somethingother: Other\n"
        )

        assert load_translation_file(path) == {
            "greeting": "Hello",
            "category": {"somethingother": "Other"},
        }

    def test_yaml_extension_alias(self, write_source: WriteSource) -> None:
        """Both .yml and .yaml are decoded."""
        path = write_source("lang_en.yaml", "a: b\n")

        assert load_translation_file(path) == {"a": "b"}

    def test_scalars_normalized(self, write_source: WriteSource) -> None:
        """YAML booleans, numbers, nulls and dates become strings."""
        path = write_source(
            "lang_en.yml", "yes_: true\ncount: 3\nratio: 0.5\nnothing: null\nday: 2024-01-31\n"
        )

        assert load_translation_file(path) == {
            "yes_": "true",
            "count": "3",
            "ratio": "0.5",
            "nothing": "",
            "day": "2024-01-31",
        }

    def test_empty_document(self, write_source: WriteSource) -> None:
        """An empty YAML document is an empty tree."""
        path = write_source("lang_en.yml", "")

        assert load_translation_file(path) == {}

    def test_top_level_must_be_mapping(self, write_source: WriteSource) -> None:
        """A YAML list at the top level is rejected."""
        path = write_source("lang_en.yml", "- a\n- b\n")

        with pytest.raises(SourceFormatError, match="top level must be a mapping"):
            load_translation_file(path)

    def test_invalid_yaml(self, write_source: WriteSource) -> None:
        """Malformed YAML is a SourceFormatError."""
        path = write_source("lang_en.yml", "a: [unclosed\n")

        with pytest.raises(SourceFormatError, match="invalid YAML"):
            load_translation_file(path)


# ============================================================================
# Normalization
# ============================================================================


class TestNormalizeTree:
    """Test leaf normalization."""

    def test_scalar_leaves(self) -> None:
        """Non-string scalars are converted to strings."""
        data: Mapping[object, object] = {
            "flag": False,
            "count": 42,
            "ratio": 1.5,
            "empty": None,
            "when": datetime.date(2024, 5, 1),
        }

        assert normalize_tree(data) == {
            "flag": "false",
            "count": "42",
            "ratio": "1.5",
            "empty": "",
            "when": "2024-05-01",
        }

    def test_lists_become_indexed_sections(self) -> None:
        """List items are keyed by their index."""
        assert normalize_tree({"days": ["Mon", "Tue"]}) == {"days": {"0": "Mon", "1": "Tue"}}

    def test_non_string_keys_normalized(self) -> None:
        """Integer keys (YAML) become strings."""
        assert normalize_tree({1: "one"}) == {"1": "one"}

    def test_unsupported_leaf_raises(self) -> None:
        """Arbitrary objects are rejected."""
        with pytest.raises(SourceFormatError, match="unsupported value of type object"):
            normalize_tree({"bad": object()})

    def test_input_not_mutated(self) -> None:
        """Normalization builds a new tree."""
        data: dict[object, object] = {"a": {"b": 1}}
        normalize_tree(data)

        assert data == {"a": {"b": 1}}

    def test_depth_limit(self) -> None:
        """Pathologically deep nesting raises DepthLimitExceededError."""
        data: dict[object, object] = {"leaf": "x"}
        for _ in range(150):
            data = {"n": data}

        with pytest.raises(DepthLimitExceededError):
            normalize_tree(data)


# ============================================================================
# Registry and dispatch
# ============================================================================


class TestDecoderRegistry:
    """Test DecoderRegistry bookkeeping."""

    def test_default_builtins(self) -> None:
        """INI, properties and JSON are always registered."""
        registry = DecoderRegistry.default()

        assert "ini" in registry
        assert "properties" in registry
        assert "json" in registry
        assert ("yml" in registry) is is_yaml_available()

    def test_extension_keys_normalized(self) -> None:
        """Extensions are case-insensitive and may carry a dot."""
        registry = DecoderRegistry()
        registry.register(".TOML", decode_ini)

        assert "toml" in registry
        assert registry.get_decoder("Toml") is decode_ini
        assert registry.list_extensions() == ["toml"]

    def test_empty_extension_rejected(self) -> None:
        """An empty extension cannot be registered."""
        with pytest.raises(ValueError, match="cannot be empty"):
            DecoderRegistry().register(".", decode_ini)

    def test_unregister(self) -> None:
        """Unregistering removes the decoder; unknown extensions are ignored."""
        registry = DecoderRegistry.default()
        registry.unregister("json")
        registry.unregister("nonexistent")

        assert "json" not in registry
        assert registry.get_decoder("json") is None

    def test_copy_is_independent(self) -> None:
        """Changes to a copy do not affect the original."""
        original = DecoderRegistry.default()
        clone = original.copy()
        clone.unregister("ini")

        assert "ini" in original
        assert "ini" not in clone
        assert len(clone) == len(original) - 1

    def test_iteration_and_repr(self) -> None:
        """Iteration yields extensions; repr lists them."""
        registry = DecoderRegistry()
        registry.register("ini", decode_ini)

        assert list(registry) == ["ini"]
        assert repr(registry) == "DecoderRegistry(extensions=['ini'])"


class TestLoadTranslationFile:
    """Test extension dispatch."""

    def test_unknown_extension(self, write_source: WriteSource) -> None:
        """A source without a registered decoder fails explicitly."""
        path = write_source("lang_en.xml", "<a/>")

        with pytest.raises(UnsupportedFormatError) as exc_info:
            load_translation_file(path)

        assert exc_info.value.extension == "xml"

    def test_yaml_without_decoder(self, write_source: WriteSource) -> None:
        """A registry lacking YAML rejects .yml sources."""
        path = write_source("lang_en.yml", "a: b\n")
        registry = DecoderRegistry.default()
        registry.unregister("yml")

        with pytest.raises(UnsupportedFormatError, match="'yml' is not a supported"):
            load_translation_file(path, registry)

    def test_custom_decoder(self, write_source: WriteSource) -> None:
        """A registered custom decoder is used and its output normalized."""
        path = write_source("lang_en.txt", "ignored")
        registry = DecoderRegistry()
        registry.register("txt", lambda _path: {"answer": 42})

        assert load_translation_file(str(path), registry) == {"answer": "42"}

    def test_extension_case_insensitive(self, write_source: WriteSource) -> None:
        """Upper-case extensions dispatch like lower-case ones."""
        path = write_source("lang_en.JSON", '{"a": "b"}')

        assert file_extension(path) == "json"
        assert load_translation_file(path) == {"a": "b"}
