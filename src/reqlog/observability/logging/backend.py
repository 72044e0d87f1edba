"""Observability – StructLogger, the structlog-backed logger the plugin drives.

Gives structlog the shape the plugin expects: one method per level name
(``trace`` … ``fatal``) taking a record and an optional message, a numeric
level table, ``child(bindings)``, and serializers applied to record keys
and child bindings.
"""
from __future__ import annotations

import math
from types import MappingProxyType
from typing import Any, Mapping

import structlog

from reqlog.config.validation import InvalidSettingValueError
from reqlog.observability.logging.levels import DEFAULT_LEVELS, LevelTable
from reqlog.observability.logging.protocol import LogRecord, Serializer

SILENT = "silent"

# structlog has no trace/fatal methods
_STRUCTLOG_METHODS: Mapping[str, str] = MappingProxyType({
    "trace": "debug",
    "debug": "debug",
    "info": "info",
    "warn": "warning",
    "error": "error",
    "fatal": "critical",
})


class StructLogger:
    """Wraps a structlog bound logger.

    Parameters
    ----------
    bound:
        Underlying structlog logger.  Defaults to ``structlog.get_logger(name)``.
    name:
        Logger name used when *bound* is not given.
    level:
        Minimum level name to emit, or ``"silent"`` to emit nothing.
    serializers:
        Mapping of record key → serializer, applied to matching top-level
        keys of every record and of every ``child`` binding.

    Every emitted entry carries ``level`` (the level name) so ``trace`` and
    ``debug`` stay distinguishable once they reach structlog's ``debug``.
    """

    levels: LevelTable = DEFAULT_LEVELS

    def __init__(
        self,
        bound: Any = None,
        *,
        name: str | None = None,
        level: str = "info",
        serializers: Mapping[str, Serializer] | None = None,
    ) -> None:
        if level != SILENT and level not in self.levels.values:
            raise InvalidSettingValueError("level", level, f"expected one of {self.levels.names + (SILENT,)}")
        self._bound = bound if bound is not None else structlog.get_logger(name)
        self._level = level
        self._threshold = math.inf if level == SILENT else self.levels.values[level]
        self._serializers: dict[str, Serializer] = dict(serializers or {})

    @property
    def level(self) -> str:
        return self._level

    @property
    def serializers(self) -> Mapping[str, Serializer]:
        return MappingProxyType(self._serializers)

    def merge_serializers(self, defaults: Mapping[str, Serializer]) -> None:
        """Fill in *defaults* for keys that have no serializer yet.

        Serializers already set on this logger keep precedence.
        """
        self._serializers = {**defaults, **self._serializers}

    def is_level_enabled(self, name: str) -> bool:
        return self.levels.values.get(name, -1) >= self._threshold

    def child(self, bindings: Mapping[str, Any]) -> "StructLogger":
        """Return a logger with *bindings* (serialized) bound to every entry."""
        child = object.__new__(StructLogger)
        child._bound = self._bound.bind(**self._serialize(bindings))
        child._level = self._level
        child._threshold = self._threshold
        child._serializers = self._serializers
        return child

    def trace(self, obj: Any = None, msg: str | None = None) -> None:
        self._emit("trace", obj, msg)

    def debug(self, obj: Any = None, msg: str | None = None) -> None:
        self._emit("debug", obj, msg)

    def info(self, obj: Any = None, msg: str | None = None) -> None:
        self._emit("info", obj, msg)

    def warn(self, obj: Any = None, msg: str | None = None) -> None:
        self._emit("warn", obj, msg)

    warning = warn

    def error(self, obj: Any = None, msg: str | None = None) -> None:
        self._emit("error", obj, msg)

    def fatal(self, obj: Any = None, msg: str | None = None) -> None:
        self._emit("fatal", obj, msg)

    def _emit(self, label: str, obj: Any, msg: str | None) -> None:
        if self.levels.values[label] < self._threshold:
            return
        fields: LogRecord
        if obj is None:
            fields = {}
        elif isinstance(obj, BaseException):
            fields = {"err": obj}
        elif isinstance(obj, Mapping):
            fields = dict(obj)
        elif isinstance(obj, str) and msg is None:
            fields, msg = {}, obj
        else:
            fields = {"data": obj}

        fields = self._serialize(fields)
        event = msg if msg is not None else fields.pop("msg", None)
        # "event" is structlog's positional message argument
        if "event" in fields:
            if event is None:
                event = fields.pop("event")
            else:
                fields["event_data"] = fields.pop("event")
        if "level" in fields:
            fields["level_data"] = fields.pop("level")
        fields["level"] = label
        getattr(self._bound, _STRUCTLOG_METHODS[label])(event, **fields)

    def _serialize(self, fields: Mapping[str, Any]) -> LogRecord:
        serializers = self._serializers
        return {
            # structlog takes fields as keyword arguments
            str(key): serializers[key](value) if value is not None and key in serializers else value
            for key, value in fields.items()
        }

    def __repr__(self) -> str:
        return f"StructLogger(level={self._level!r})"


__all__ = ["SILENT", "StructLogger"]
