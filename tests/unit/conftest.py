"""Shared fixtures for unit tests."""
from __future__ import annotations

from typing import Any, Mapping

import pytest

from reqlog.observability.logging import DEFAULT_LEVELS


class RecordingLogger:
    """Logger double that records ``(level, obj, msg, bindings)`` tuples."""

    levels = DEFAULT_LEVELS

    def __init__(self, bindings: Mapping[str, Any] | None = None, sink: list | None = None) -> None:
        self.bindings = dict(bindings or {})
        self.records: list[tuple[str, Any, Any, dict[str, Any]]] = [] if sink is None else sink
        self.serializers: dict[str, Any] = {}
        self.children = 0

    def _record(self, level: str, obj: Any, msg: Any) -> None:
        self.records.append((level, obj, msg, self.bindings))

    def trace(self, obj: Any = None, msg: Any = None) -> None:
        self._record("trace", obj, msg)

    def debug(self, obj: Any = None, msg: Any = None) -> None:
        self._record("debug", obj, msg)

    def info(self, obj: Any = None, msg: Any = None) -> None:
        self._record("info", obj, msg)

    def warn(self, obj: Any = None, msg: Any = None) -> None:
        self._record("warn", obj, msg)

    def error(self, obj: Any = None, msg: Any = None) -> None:
        self._record("error", obj, msg)

    def fatal(self, obj: Any = None, msg: Any = None) -> None:
        self._record("fatal", obj, msg)

    def child(self, bindings: Mapping[str, Any]) -> "RecordingLogger":
        self.children += 1
        child = RecordingLogger({**self.bindings, **bindings}, self.records)
        child.serializers = self.serializers
        return child

    def merge_serializers(self, defaults: Mapping[str, Any]) -> None:
        self.serializers.update({k: v for k, v in defaults.items() if k not in self.serializers})

    def levels_logged(self) -> list[str]:
        return [level for level, *_ in self.records]


@pytest.fixture()
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
