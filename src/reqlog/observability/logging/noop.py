"""Observability – NoopLogger."""
from __future__ import annotations

from typing import Any, Mapping

from reqlog.observability.logging.levels import DEFAULT_LEVELS, LevelTable


def _discard(*args: Any, **kwargs: Any) -> None:  # noqa: ARG001
    pass


class NoopLogger:
    """Silent logger handed to requests on ignored paths.

    Every level method discards its arguments, ``child`` returns the same
    instance, and unknown attributes resolve to a discarding callable.
    """

    levels: LevelTable = DEFAULT_LEVELS

    trace = debug = info = warn = warning = error = fatal = critical = staticmethod(_discard)

    def child(self, bindings: Mapping[str, Any] | None = None) -> "NoopLogger":  # noqa: ARG002
        return self

    def is_level_enabled(self, name: str) -> bool:  # noqa: ARG002
        return False

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        return _discard

    def __repr__(self) -> str:
        return "NoopLogger()"


#: Shared instance; it holds no state.
NOOP_LOGGER = NoopLogger()


__all__ = ["NOOP_LOGGER", "NoopLogger"]
