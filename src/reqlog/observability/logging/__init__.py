"""Observability – tag-to-severity resolution, snapshots and the structlog backend."""
from reqlog.observability.logging.backend import SILENT, StructLogger
from reqlog.observability.logging.factory import JsonLoggerFactory, get_logger, json_default
from reqlog.observability.logging.ignore import IgnoreTable
from reqlog.observability.logging.levels import (
    DEFAULT_LEVELS,
    LEVEL_TAGS,
    NO_MATCH,
    LevelMap,
    LevelTable,
    Severity,
)
from reqlog.observability.logging.noop import NOOP_LOGGER, NoopLogger
from reqlog.observability.logging.protocol import LogRecord, Logger, Serializer
from reqlog.observability.logging.resolver import Resolver
from reqlog.observability.logging.serializers import (
    build_serializers,
    serialize_error,
    wrap_request_serializer,
    wrap_response_serializer,
    wrap_serializer,
)
from reqlog.observability.logging.snapshot import (
    RequestSnapshot,
    ResponseSnapshot,
    Snapshot,
    as_request_value,
    as_response_value,
)

__all__ = [
    "DEFAULT_LEVELS",
    "IgnoreTable",
    "JsonLoggerFactory",
    "LEVEL_TAGS",
    "LevelMap",
    "LevelTable",
    "LogRecord",
    "Logger",
    "NOOP_LOGGER",
    "NO_MATCH",
    "NoopLogger",
    "RequestSnapshot",
    "Resolver",
    "ResponseSnapshot",
    "SILENT",
    "Serializer",
    "Severity",
    "Snapshot",
    "StructLogger",
    "as_request_value",
    "as_response_value",
    "build_serializers",
    "get_logger",
    "json_default",
    "serialize_error",
    "wrap_request_serializer",
    "wrap_response_serializer",
    "wrap_serializer",
]
