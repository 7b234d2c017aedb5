"""langcache exception hierarchy.

All errors raised by the resolution, loading, compilation, cache and runtime
layers derive from I18nError so callers can catch the whole family at once.

Hierarchy:
    I18nError (base)
    ├─ ConfigurationError (invalid or frozen configuration)
    │  └─ AlreadyInitializedError (mutation or re-init after initialization)
    ├─ NoLanguageFileFoundError (no candidate resolves to a file)
    ├─ UnsupportedFormatError (no decoder registered for extension)
    ├─ SourceFormatError (file could not be decoded into a tree)
    ├─ InvalidIdentifierError (qualified name fails identifier grammar)
    ├─ DepthLimitExceededError (tree nesting too deep)
    ├─ WriteError (cache directory/file could not be written)
    ├─ CacheCorruptionError (cache record fails verification)
    ├─ UnknownTranslationKeyError (lookup of absent qualified name)
    └─ TranslationFormatError (positional argument substitution failed)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "AlreadyInitializedError",
    "CacheCorruptionError",
    "ConfigurationError",
    "DepthLimitExceededError",
    "I18nError",
    "InvalidIdentifierError",
    "NoLanguageFileFoundError",
    "SourceFormatError",
    "TranslationFormatError",
    "UnknownTranslationKeyError",
    "UnsupportedFormatError",
    "WriteError",
]


class I18nError(Exception):
    """Base exception for all langcache errors."""


class ConfigurationError(I18nError):
    """Loader configuration is invalid or can no longer be changed."""


class AlreadyInitializedError(ConfigurationError):
    """Raised when configuring or initializing a loader a second time.

    Initialization freezes the configuration. Every setter and every further
    call to init()/finish_setup() fails with this error.
    """


class NoLanguageFileFoundError(I18nError):
    """No candidate language resolves to an existing source file.

    Attributes:
        candidates: Language codes that were tried, in priority order
        file_path: Path template the candidates were substituted into
    """

    def __init__(self, candidates: tuple[str, ...], file_path: str) -> None:
        """Initialize NoLanguageFileFoundError.

        Args:
            candidates: Language codes that were tried
            file_path: Path template containing the language placeholder
        """
        tried = ", ".join(candidates) if candidates else "<none>"
        super().__init__(
            f"No language file was found for template '{file_path}' (tried: {tried})"
        )
        self.candidates = candidates
        self.file_path = file_path


class UnsupportedFormatError(I18nError):
    """No decoder is registered for a source file extension.

    Also raised for YAML sources when PyYAML is not installed, because the
    YAML decoder is only registered when it can actually run.

    Attributes:
        extension: Lower-cased extension without the leading dot
    """

    def __init__(self, extension: str, path: Path | str | None = None) -> None:
        """Initialize UnsupportedFormatError.

        Args:
            extension: Lower-cased file extension
            path: Source file that triggered the lookup (optional)
        """
        msg = f"'{extension}' is not a supported translation file extension"
        if path is not None:
            msg = f"{msg} (file: {path})"
        super().__init__(msg)
        self.extension = extension


class SourceFormatError(I18nError):
    """A translation source could not be decoded into a translation tree.

    Attributes:
        path: Source file that failed to decode (if known)
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        """Initialize SourceFormatError.

        Args:
            message: Description of the decoding problem
            path: Offending source file (optional)
        """
        super().__init__(f"{path}: {message}" if path is not None else message)
        self.path = path


class InvalidIdentifierError(I18nError):
    """A compiled qualified name does not match the identifier grammar.

    Attributes:
        name: The offending qualified name
    """

    def __init__(self, name: str) -> None:
        """Initialize InvalidIdentifierError.

        Args:
            name: Qualified name that failed validation
        """
        super().__init__(
            f"Cannot compile translation key {name!r} because it is not a valid identifier"
        )
        self.name = name


class DepthLimitExceededError(I18nError):
    """Translation tree nesting exceeds the configured maximum depth."""


class WriteError(I18nError):
    """The compiled artifact could not be persisted to the cache directory.

    Attributes:
        path: Cache file (or directory) that could not be written
    """

    def __init__(self, message: str, path: Path | str) -> None:
        """Initialize WriteError.

        Args:
            message: Description of the failure
            path: Target path
        """
        super().__init__(message)
        self.path = path


class CacheCorruptionError(I18nError):
    """A cache record is unreadable or fails checksum verification.

    Attributes:
        path: Cache file that failed verification
        expected: Expected value (checksum or format version), if applicable
        actual: Value found in the record, if applicable
    """

    def __init__(
        self,
        message: str,
        path: Path | str,
        *,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        """Initialize CacheCorruptionError.

        Args:
            message: Human-readable error description
            path: Cache file that failed verification
            expected: Expected value (optional)
            actual: Actual value found (optional)
        """
        super().__init__(f"{message} (cache file: {path})")
        self.path = path
        self.expected = expected
        self.actual = actual


class UnknownTranslationKeyError(I18nError, KeyError):
    """Lookup of a qualified name that is not present in the catalog.

    Subclasses KeyError so catalogs behave like ordinary mappings
    (``in``, ``get()``). Attribute access on a catalog re-raises this as
    AttributeError.

    Attributes:
        name: The requested qualified name
        prefix: Namespace prefix of the catalog that was queried
    """

    def __init__(self, name: str, prefix: str) -> None:
        """Initialize UnknownTranslationKeyError.

        Args:
            name: Requested qualified name
            prefix: Namespace prefix of the catalog
        """
        super().__init__(f"Unknown translation key '{prefix}::{name}'")
        self.name = name
        self.prefix = prefix

    def __str__(self) -> str:
        """Return the message without KeyError's repr quoting."""
        return str(self.args[0])


class TranslationFormatError(I18nError):
    """Positional argument substitution into a literal failed.

    Attributes:
        name: Qualified name of the literal being formatted
    """

    def __init__(self, name: str, reason: str) -> None:
        """Initialize TranslationFormatError.

        Args:
            name: Qualified name of the literal
            reason: Underlying formatting error text
        """
        super().__init__(f"Cannot format translation '{name}': {reason}")
        self.name = name
