"""Config – environment-driven codec and logging settings."""

from launchd_plist.config.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from launchd_plist.config.loaders import EnvSettingsLoader, SettingsLoader
from launchd_plist.config.settings import CodecSettings, LoggingSettings, Settings

__all__ = [
    "CodecSettings",
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "LoggingSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
