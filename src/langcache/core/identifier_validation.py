"""Identifier and language code validation.

Single source of truth for the two grammars the pipeline enforces:

Qualified name grammar (compiled translation keys, namespace prefix):
    [A-Za-z_<non-ASCII>][A-Za-z0-9_<non-ASCII>]*

    - Start: ASCII letter, underscore, or any character >= U+007F
    - Continue: ASCII letter, ASCII digit, underscore, or any character >= U+007F

Language code grammar (candidate codes from request signals):
    [A-Za-z0-9_-]*

Thread Safety:
    All functions in this module are pure functions with no shared state.

Python 3.13+.
"""

from __future__ import annotations

import re

__all__ = [
    "is_valid_identifier",
    "is_valid_language_code",
]

_IDENTIFIER_PATTERN: re.Pattern[str] = re.compile(
    r"[A-Za-z_\x7f-\U0010ffff][A-Za-z0-9_\x7f-\U0010ffff]*"
)

# Empty string matches; callers that need a non-empty code check separately.
_LANGUAGE_CODE_PATTERN: re.Pattern[str] = re.compile(r"[A-Za-z0-9_-]*")


def is_valid_identifier(name: str) -> bool:
    """Validate a complete qualified name.

    Args:
        name: Qualified name to validate

    Returns:
        True if name matches the identifier grammar, False otherwise

    Example:
        >>> is_valid_identifier("category_somethingother")
        True
        >>> is_valid_identifier("_private")
        True
        >>> is_valid_identifier("größe")
        True
        >>> is_valid_identifier("1st")
        False
        >>> is_valid_identifier("with-dash")
        False
        >>> is_valid_identifier("")
        False
    """
    return _IDENTIFIER_PATTERN.fullmatch(name) is not None


def is_valid_language_code(code: str) -> bool:
    """Check a candidate language code against the allowed character set.

    Only ASCII letters, digits, underscore and hyphen are accepted, which
    rules out path separators and traversal sequences before a code is
    substituted into a file path.

    Example:
        >>> is_valid_language_code("pt_BR")
        True
        >>> is_valid_language_code("../etc")
        False
    """
    return _LANGUAGE_CODE_PATTERN.fullmatch(code) is not None
