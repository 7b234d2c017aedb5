"""Core utilities shared across the resolution, loading and compile layers.

Exports:
    DepthGuard: Context manager for recursion depth limiting
    is_valid_identifier: Qualified name grammar check
    is_valid_language_code: Candidate language code check

Python 3.13+.
"""

from .depth_guard import DepthGuard
from .identifier_validation import is_valid_identifier, is_valid_language_code

__all__ = ["DepthGuard", "is_valid_identifier", "is_valid_language_code"]
