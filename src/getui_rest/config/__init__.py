"""Config – 12-factor settings and loaders."""

from getui_rest.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    GetuiSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from getui_rest.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "GetuiSettings",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
