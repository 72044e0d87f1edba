"""Config validation errors."""
from reqlog.config.validation.errors import (
    ConfigError,
    InvalidSettingValueError,
    InvalidTagLevelConfigError,
    MissingRequiredSettingError,
    UnsupportedEventTypeError,
)

__all__ = [
    "ConfigError",
    "InvalidSettingValueError",
    "InvalidTagLevelConfigError",
    "MissingRequiredSettingError",
    "UnsupportedEventTypeError",
]
