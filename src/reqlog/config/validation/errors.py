"""Config validation errors.

Everything here is raised while the plugin is being set up, never while
events are being processed.
"""
from __future__ import annotations

from typing import Mapping

from reqlog.kernel.errors import ReqlogError


class ConfigError(ReqlogError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable / setting is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing")
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but semantically invalid."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}"
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


class InvalidTagLevelConfigError(ConfigError):
    """A tag (or the fallback) maps to a name that is not a known severity.

    ``invalid_tags`` maps each offending tag to the level name it was given;
    ``fallback`` holds the bad fallback name, or ``None`` if it was valid.
    """
    default_code = "invalid_tag_levels"

    def __init__(
        self,
        invalid_tags: Mapping[str, object] | None = None,
        fallback: object | None = None,
    ) -> None:
        self.invalid_tags = dict(invalid_tags or {})
        self.fallback = fallback
        parts = [f"{tag!r} -> {level!r}" for tag, level in self.invalid_tags.items()]
        if fallback is not None:
            parts.append(f"all_tags -> {fallback!r}")
        super().__init__(
            "invalid tag levels: " + ", ".join(parts),
            detail={"invalid_tags": self.invalid_tags, "fallback": fallback},
        )


class UnsupportedEventTypeError(ConfigError):
    """A lifecycle hook was registered with a type other than ``on``/``ext``."""
    default_code = "unsupported_event_type"

    def __init__(self, event_type: str) -> None:
        super().__init__(f"unsupported type {event_type}")
        self.event_type = event_type


__all__ = [
    "ConfigError",
    "InvalidSettingValueError",
    "InvalidTagLevelConfigError",
    "MissingRequiredSettingError",
    "UnsupportedEventTypeError",
]
