"""Tests for locale_utils.py.

Python 3.13+.
"""

from __future__ import annotations

import pytest

from langcache.core.compat import is_babel_available
from langcache.locale_utils import clear_locale_cache, get_babel_locale, normalize_locale


class TestNormalizeLocale:
    """Test BCP-47 to POSIX conversion."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("en-US", "en_US"), ("pt_BR", "pt_BR"), ("de", "de"), ("zh-Hant-TW", "zh_Hant_TW")],
    )
    def test_hyphens_become_underscores(self, code: str, expected: str) -> None:
        """Hyphens are replaced; everything else is kept."""
        assert normalize_locale(code) == expected


@pytest.mark.skipif(not is_babel_available(), reason="Babel not installed")
class TestGetBabelLocale:
    """Test Babel Locale lookup."""

    def test_language_only(self) -> None:
        """Two-letter codes resolve to a language locale."""
        locale = get_babel_locale("de")

        assert locale.language == "de"
        assert locale.territory is None

    def test_bcp47_code(self) -> None:
        """Hyphenated codes are accepted."""
        locale = get_babel_locale("de-CH")

        assert (locale.language, locale.territory) == ("de", "CH")

    def test_cached(self) -> None:
        """Repeated lookups return the same object until cleared."""
        clear_locale_cache()
        first = get_babel_locale("fr")

        assert get_babel_locale("fr") is first

        clear_locale_cache()
        assert get_babel_locale.cache_info().currsize == 0

    def test_unknown_locale(self) -> None:
        """Unknown codes propagate Babel's error."""
        from babel.core import UnknownLocaleError  # noqa: PLC0415

        with pytest.raises(UnknownLocaleError):
            get_babel_locale("xx")
