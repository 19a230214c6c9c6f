"""Unit tests for config settings & validation."""

from __future__ import annotations

import pytest

from mp_search.config.settings import DotenvSettingsLoader, EnvSettingsLoader, SearchEngineSettings
from mp_search.config.validation import InvalidSettingValueError
from mp_search.kernel.types import NamingConvention


# ---------------------------------------------------------------------------
# SearchEngineSettings
# ---------------------------------------------------------------------------


class TestSearchEngineSettings:
    def test_defaults(self) -> None:
        settings = SearchEngineSettings()
        assert settings.max_page_size == 100
        assert settings.naming_convention is NamingConvention.IDENTITY

    def test_max_page_size_must_be_positive(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            SearchEngineSettings(max_page_size=0)

    def test_naming_convention_from_string(self) -> None:
        settings = SearchEngineSettings(naming_convention="snake_case")  # type: ignore[arg-type]
        assert settings.naming_convention is NamingConvention.SNAKE_CASE

    def test_unknown_naming_convention(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            SearchEngineSettings(naming_convention="kebab")  # type: ignore[arg-type]
        assert exc_info.value.setting_name == "naming_convention"


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_defaults_without_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SEARCH_ENGINE_MAX_PAGE_SIZE", raising=False)
        monkeypatch.delenv("SEARCH_ENGINE_NAMING_CONVENTION", raising=False)
        settings = EnvSettingsLoader().load(SearchEngineSettings)
        assert settings.max_page_size == 100

    def test_loads_int(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEARCH_ENGINE_MAX_PAGE_SIZE", "250")
        settings = EnvSettingsLoader().load(SearchEngineSettings)
        assert settings.max_page_size == 250

    def test_loads_enum_by_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEARCH_ENGINE_NAMING_CONVENTION", "DOT.CASE")
        settings = EnvSettingsLoader().load(SearchEngineSettings)
        assert settings.naming_convention is NamingConvention.DOT_CASE

    def test_loads_enum_by_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEARCH_ENGINE_NAMING_CONVENTION", "snake_case")
        settings = EnvSettingsLoader().load(SearchEngineSettings)
        assert settings.naming_convention is NamingConvention.SNAKE_CASE

    def test_invalid_int(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEARCH_ENGINE_MAX_PAGE_SIZE", "lots")
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader().load(SearchEngineSettings)
        assert exc_info.value.setting_name == "SEARCH_ENGINE_MAX_PAGE_SIZE"

    def test_invalid_value_from_validation(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEARCH_ENGINE_MAX_PAGE_SIZE", "-5")
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader().load(SearchEngineSettings)


class TestDotenvSettingsLoader:
    def test_env_file_overrides_environment(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        # setenv first so monkeypatch restores the original value afterwards
        monkeypatch.setenv("SEARCH_ENGINE_MAX_PAGE_SIZE", "7")
        env_file = tmp_path / ".env"
        env_file.write_text("SEARCH_ENGINE_MAX_PAGE_SIZE=42\n")
        settings = DotenvSettingsLoader(str(env_file), override=True).load(SearchEngineSettings)
        assert settings.max_page_size == 42

    def test_environment_wins_without_override(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEARCH_ENGINE_MAX_PAGE_SIZE", "7")
        env_file = tmp_path / ".env"
        env_file.write_text("SEARCH_ENGINE_MAX_PAGE_SIZE=42\n")
        settings = DotenvSettingsLoader(str(env_file)).load(SearchEngineSettings)
        assert settings.max_page_size == 7


class TestEnvKey:
    def test_prefixed_upper_case(self) -> None:
        assert SearchEngineSettings.env_key("max_page_size") == "SEARCH_ENGINE_MAX_PAGE_SIZE"

    def test_no_prefix(self) -> None:
        from mp_search.config.settings import Settings

        assert Settings.env_key("debug") == "DEBUG"
