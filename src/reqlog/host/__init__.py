"""Host – in-process request lifecycle (server, requests, events)."""
from reqlog.host.events import (
    APP_CHANNEL,
    ERROR_CHANNEL,
    INTERNAL_CHANNEL,
    LifecycleEvent,
    LifecycleRequest,
    LifecycleResponse,
    normalize_tags,
)
from reqlog.host.server import EVENTS, EXT_POINTS, EventBus, LifecycleServer

__all__ = [
    "APP_CHANNEL",
    "ERROR_CHANNEL",
    "EVENTS",
    "EXT_POINTS",
    "EventBus",
    "INTERNAL_CHANNEL",
    "LifecycleEvent",
    "LifecycleRequest",
    "LifecycleResponse",
    "LifecycleServer",
    "normalize_tags",
]
