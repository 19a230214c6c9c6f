"""Config – 12-factor settings, loaders, and configuration errors."""

from mp_search.config.settings import (
    EnvSettingsLoader,
    SearchEngineSettings,
    Settings,
    SettingsLoader,
)
from mp_search.config.validation import (
    ConfigError,
    ConfigurationError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "ConfigurationError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SearchEngineSettings",
    "Settings",
    "SettingsLoader",
]
