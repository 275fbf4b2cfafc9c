"""Config settings – 12-factor env-based configuration."""
from getui_rest.config.settings.base import DEFAULT_BASE_URL, GetuiSettings, Settings
from getui_rest.config.settings.factory import SettingsFactory
from getui_rest.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DEFAULT_BASE_URL",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "GetuiSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
