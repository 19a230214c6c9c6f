"""Config settings – 12-factor env-based configuration."""
from mp_search.config.settings.base import Settings
from mp_search.config.settings.engine import DEFAULT_MAX_PAGE_SIZE, SearchEngineSettings
from mp_search.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DEFAULT_MAX_PAGE_SIZE",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "SearchEngineSettings",
    "Settings",
    "SettingsLoader",
]
