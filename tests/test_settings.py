"""Tests for VldSettings resolution (defaults < environment < overrides)."""

import pytest
from pydantic import ValidationError as PydanticValidationError

import vld
from vld.settings import VldSettings, get_settings, load_settings, reset_settings


class TestLoadSettings:
    """Tests for load_settings precedence."""

    def test_defaults(self):
        settings = load_settings(environ={})
        assert settings.default_locale == "en"
        assert settings.collect_all_issues is True
        assert settings.warn_on_dangerous_keys is True

    def test_environment_overrides_defaults(self):
        settings = load_settings(
            environ={"VLD_LOCALE": "de", "VLD_COLLECT_ALL_ISSUES": "false"}
        )
        assert settings.default_locale == "de"
        assert settings.collect_all_issues is False

    def test_explicit_overrides_environment(self):
        settings = load_settings(
            overrides={"default_locale": "tr", "warn_on_dangerous_keys": None},
            environ={"VLD_LOCALE": "de", "VLD_WARN_ON_DANGEROUS_KEYS": "off"},
        )
        assert settings.default_locale == "tr"
        assert settings.warn_on_dangerous_keys is False

    @pytest.mark.parametrize("text", ["1", "true", "YES", " on "])
    def test_truthy_flags(self, text):
        assert VldSettings(collect_all_issues=text).collect_all_issues is True

    @pytest.mark.parametrize("text", ["0", "false", "No", "off"])
    def test_falsy_flags(self, text):
        assert VldSettings(collect_all_issues=text).collect_all_issues is False

    def test_rejects_short_locale(self):
        with pytest.raises(PydanticValidationError):
            VldSettings(default_locale="x")


class TestCachedSettings:
    """Tests for get_settings caching."""

    def test_cached_until_reset(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("VLD_LOCALE", "de")
        assert get_settings() is first
        reset_settings()
        assert get_settings().default_locale == "de"

    def test_environment_disables_accumulation(self, monkeypatch):
        monkeypatch.setenv("VLD_COLLECT_ALL_ISSUES", "false")
        reset_settings()
        schema = vld.object_({"a": vld.string(), "b": vld.string()})
        result = schema.safe_parse({"a": 1, "b": 2})
        assert len(result.issues) == 1

    def test_environment_selects_locale(self, monkeypatch):
        monkeypatch.setenv("VLD_LOCALE", "de")
        reset_settings()
        result = vld.string().min(3).safe_parse("ab")
        assert result.issues[0].message == "Zeichenkette muss mindestens 3 Zeichen lang sein"
