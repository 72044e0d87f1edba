"""Config settings – dataclass settings loaded from the environment."""
from reqlog.config.settings.base import Settings
from reqlog.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from reqlog.config.settings.plugin import DEFAULT_LOG_EVENTS, PluginSettings

__all__ = [
    "DEFAULT_LOG_EVENTS",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "PluginSettings",
    "Settings",
    "SettingsLoader",
]
