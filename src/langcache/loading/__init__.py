"""Translation source loading: decoding files and merging the fallback language.

Submodules:
    decoders - DecoderRegistry, built-in INI/JSON/YAML decoders, load_translation_file
    merge    - merge_fallback deep merge

Python 3.13+.
"""

from langcache.loading.decoders import (
    Decoder,
    DecoderRegistry,
    decode_ini,
    decode_json,
    decode_yaml,
    file_extension,
    load_translation_file,
    normalize_tree,
)
from langcache.loading.merge import merge_fallback

__all__ = [
    "Decoder",
    "DecoderRegistry",
    "decode_ini",
    "decode_json",
    "decode_yaml",
    "file_extension",
    "load_translation_file",
    "merge_fallback",
    "normalize_tree",
]
