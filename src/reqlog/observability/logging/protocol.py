"""Observability – Logger protocol and LogRecord."""
from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol

from reqlog.observability.logging.levels import LevelTable

#: Shaped record handed to a logger method: ``{"tags", "data"}`` or the flat merge.
LogRecord = dict[str, Any]

#: A serializer turns one value of a record (``req``, ``res``, ``err`` …) into a loggable one.
Serializer = Callable[[Any], Any]


class Logger(Protocol):
    """What the plugin needs from a logger.

    One method per level name taking a record (or exception, or message)
    and an optional message, ``child(bindings)``, and the ``levels`` table.
    """

    levels: LevelTable

    def trace(self, obj: Any = None, msg: str | None = None) -> None: ...
    def debug(self, obj: Any = None, msg: str | None = None) -> None: ...
    def info(self, obj: Any = None, msg: str | None = None) -> None: ...
    def warn(self, obj: Any = None, msg: str | None = None) -> None: ...
    def error(self, obj: Any = None, msg: str | None = None) -> None: ...
    def fatal(self, obj: Any = None, msg: str | None = None) -> None: ...
    def child(self, bindings: Mapping[str, Any]) -> "Logger": ...


__all__ = ["LogRecord", "Logger", "Serializer"]
