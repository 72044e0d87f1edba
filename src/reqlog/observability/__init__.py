"""Observability – request-lifecycle logging."""

from reqlog.observability.logging import (
    IgnoreTable,
    JsonLoggerFactory,
    LevelMap,
    Logger,
    NoopLogger,
    Resolver,
    Severity,
    StructLogger,
)

__all__ = [
    "IgnoreTable",
    "JsonLoggerFactory",
    "LevelMap",
    "Logger",
    "NoopLogger",
    "Resolver",
    "Severity",
    "StructLogger",
]
