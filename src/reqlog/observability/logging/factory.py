"""Observability – JsonLoggerFactory and get_logger."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import IO, Any, Mapping

import structlog

from reqlog.observability.logging.serializers import serialize_error
from reqlog.observability.logging.snapshot import Snapshot


def json_default(obj: Any) -> Any:
    """``json.dumps`` fallback: snapshots and mappings as dicts, errors serialized."""
    if isinstance(obj, Snapshot):
        return obj.to_dict()
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, BaseException):
        return serialize_error(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    return repr(obj)


class JsonLoggerFactory:
    """Configure structlog for one-JSON-object-per-line output.

    Level filtering happens in :class:`StructLogger`, so the stdlib side is
    opened up to ``DEBUG`` by default.
    """

    @staticmethod
    def configure(level: int = logging.DEBUG, stream: IO[str] | None = None) -> logging.Handler:
        """Install the JSON pipeline on the root logger and return its handler."""
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(default=json_default),
            ],
        )
        handler = logging.StreamHandler(stream)
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)
        return handler


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger for the package's own diagnostics."""
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["JsonLoggerFactory", "get_logger", "json_default"]
