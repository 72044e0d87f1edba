"""Config settings – PluginSettings, every option ``register`` understands."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable

from reqlog.config.settings.base import Settings
from reqlog.config.validation import InvalidSettingValueError

DEFAULT_LOG_EVENTS: tuple[str, ...] = ("on_post_start", "on_post_stop", "response", "request-error")

# what register needs from a reused logger
_INSTANCE_SURFACE = ("child", "merge_serializers", "info", "warn")


@dataclasses.dataclass
class PluginSettings(Settings):
    """Options of the request logging plugin.

    ``tags`` maps event tags to severity names and ``all_tags`` is the
    severity of events whose tags map to nothing.  ``log_events`` of
    ``None`` selects :data:`DEFAULT_LOG_EVENTS`; an empty list disables
    them all.  ``serializers`` and ``instance`` cannot come from the
    environment.
    """

    _prefix = "REQLOG"

    tags: dict[str, str] = dataclasses.field(default_factory=dict)
    all_tags: str = "info"
    ignore_paths: list[str] = dataclasses.field(default_factory=list)
    merge_log_data: bool = False
    log_events: list[str] | None = None
    log_payload: bool = False
    log_route_tags: bool = False
    level: str = "info"
    name: str | None = None
    serializers: dict[str, Callable[[Any], Any]] = dataclasses.field(default_factory=dict, metadata={"env": False})
    instance: Any = dataclasses.field(default=None, metadata={"env": False})

    def _validate(self) -> None:
        # imported here: the logging package imports this config package
        from reqlog.observability.logging import SILENT, LevelMap, StructLogger

        LevelMap.build(self.tags, self.all_tags)
        if self.level != SILENT and self.level not in StructLogger.levels.values:
            raise InvalidSettingValueError("level", self.level, "unknown log level")
        for key, serializer in self.serializers.items():
            if not callable(serializer):
                raise InvalidSettingValueError(f"serializers[{key!r}]", serializer, "must be callable")
        if self.instance is not None and not all(
            callable(getattr(self.instance, attr, None)) for attr in _INSTANCE_SURFACE
        ):
            raise InvalidSettingValueError(
                "instance", self.instance, "expected a logger with child() and merge_serializers()"
            )

    def is_log_event_enabled(self, name: str) -> bool:
        events = DEFAULT_LOG_EVENTS if self.log_events is None else self.log_events
        return name in events


__all__ = ["DEFAULT_LOG_EVENTS", "PluginSettings"]
