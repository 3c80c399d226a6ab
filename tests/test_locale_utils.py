"""Tests for locale normalization, system locale detection and overlay chains."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from blockmessages.locale_utils import (
    get_babel_locale,
    get_system_locale,
    locale_overlay_chain,
    normalize_locale,
)


class TestNormalizeLocale:
    """Test BCP-47 to POSIX conversion."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("en", "en"), ("pt-BR", "pt_BR"), ("zh-Hans-CN", "zh_Hans_CN"), ("de_CH", "de_CH")],
    )
    def test_normalize(self, code: str, expected: str) -> None:
        """Hyphens become underscores."""
        assert normalize_locale(code) == expected

    @given(st.text(alphabet="abcXYZ-_", max_size=12))
    def test_idempotent(self, code: str) -> None:
        """Normalizing twice changes nothing."""
        assert normalize_locale(normalize_locale(code)) == normalize_locale(code)


class TestGetBabelLocale:
    """Test cached Babel parsing."""

    def test_accepts_bcp47(self) -> None:
        """BCP-47 codes parse."""
        locale = get_babel_locale("pt-BR")

        assert locale.language == "pt"
        assert locale.territory == "BR"

    def test_cached(self) -> None:
        """Repeated calls return the same object."""
        assert get_babel_locale("de") is get_babel_locale("de")


class TestLocaleOverlayChain:
    """Test overlay directory expansion."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("en", ("en",)),
            ("de-CH", ("de", "de_CH")),
            ("pt_BR", ("pt", "pt_BR")),
            ("zh-Hans-CN", ("zh", "zh_Hans", "zh_Hans_CN")),
            ("zh_TW", ("zh", "zh_Hant", "zh_Hant_TW", "zh_TW")),
            ("sr-RS", ("sr", "sr_Cyrl", "sr_Cyrl_RS", "sr_RS")),
        ],
    )
    def test_chain(self, code: str, expected: tuple[str, ...]) -> None:
        """Chain runs from language to the locale as given."""
        assert locale_overlay_chain(code) == expected

    def test_unknown_locale_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown locales use the normalized code alone and warn."""
        with caplog.at_level(logging.WARNING, logger="blockmessages.locale_utils"):
            chain = locale_overlay_chain("qq-ZZ")

        assert chain == ("qq_ZZ",)
        assert "Unknown locale 'qq-ZZ'" in caplog.text


class TestGetSystemLocale:
    """Test system locale detection order."""

    @pytest.fixture(autouse=True)
    def _no_os_locale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("locale.getlocale", lambda: (None, None))
        for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
            monkeypatch.delenv(var, raising=False)

    def test_os_locale_first(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """locale.getlocale() wins over the environment."""
        monkeypatch.setattr("locale.getlocale", lambda: ("fr_FR", "UTF-8"))
        monkeypatch.setenv("LANG", "de_DE.UTF-8")

        assert get_system_locale() == "fr_FR"

    def test_lc_all_before_lang(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """LC_ALL overrides LANG."""
        monkeypatch.setenv("LC_ALL", "es_ES.UTF-8")
        monkeypatch.setenv("LANG", "de_DE.UTF-8")

        assert get_system_locale() == "es_ES"

    def test_lc_messages(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """LC_MESSAGES is consulted before LANG."""
        monkeypatch.setenv("LC_MESSAGES", "it-IT")
        monkeypatch.setenv("LANG", "de_DE")

        assert get_system_locale() == "it_IT"

    def test_posix_pseudo_locale_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """C and POSIX are skipped."""
        monkeypatch.setenv("LC_ALL", "C")
        monkeypatch.setenv("LANG", "POSIX")

        assert get_system_locale() == "en_US"

    def test_pseudo_locale_with_encoding_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """C.UTF-8 counts as the C pseudo-locale."""
        monkeypatch.setattr("locale.getlocale", lambda: ("C", "UTF-8"))
        monkeypatch.setenv("LANG", "C.UTF-8")

        assert get_system_locale() == "en_US"

    def test_pseudo_locale_skipped_for_next_candidate(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A C.UTF-8 entry does not stop the search."""
        monkeypatch.setenv("LC_ALL", "C.UTF-8")
        monkeypatch.setenv("LANG", "nl_NL.UTF-8")

        assert get_system_locale() == "nl_NL"

    def test_fallback(self) -> None:
        """Nothing configured means en_US."""
        assert get_system_locale() == "en_US"
