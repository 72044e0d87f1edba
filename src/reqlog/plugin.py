"""Request logging plugin – wires a :class:`LifecycleServer` to a logger.

Usage::

    from reqlog import register
    from reqlog.host import LifecycleServer

    server = LifecycleServer()
    register(server, tags={"db": "debug"}, all_tags="info", ignore_paths=["/health"])
    server.logger().info("ready")

Every configuration check happens before anything is registered on the
server, so a bad configuration leaves the server untouched.
"""
from __future__ import annotations

from typing import Any, Callable

from reqlog.config.settings import PluginSettings
from reqlog.config.validation import UnsupportedEventTypeError
from reqlog.host.events import APP_CHANNEL, INTERNAL_CHANNEL, LifecycleEvent, LifecycleRequest
from reqlog.observability.logging import (
    NOOP_LOGGER,
    IgnoreTable,
    LevelMap,
    Logger,
    Resolver,
    StructLogger,
    build_serializers,
    get_logger,
)

_log = get_logger(__name__)

NAME = "reqlog"


def try_add_event(
    server: Any,
    settings: PluginSettings,
    kind: str,
    name: str,
    handler: Callable[..., Any],
) -> bool:
    """Subscribe *handler* when *name* is an enabled log event.

    *kind* is ``"on"`` for server events and ``"ext"`` for extension
    points.  Returns whether the handler was added.
    """
    if not settings.is_log_event_enabled(name):
        return False
    if kind == "on":
        server.events.on(name, handler)
    elif kind == "ext":
        server.ext(name, handler)
    else:
        raise UnsupportedEventTypeError(kind)
    return True


def register(server: Any, settings: PluginSettings | None = None, **options: Any) -> Logger:
    """Register request logging on *server* and return the logger.

    Parameters
    ----------
    server:
        A :class:`~reqlog.host.LifecycleServer` (or anything with the same
        ``decorate`` / ``ext`` / ``events.on`` surface).
    settings:
        Base :class:`PluginSettings`; *options* are applied on top.

    Raises
    ------
    InvalidTagLevelConfigError
        When a tag or ``all_tags`` names an unknown severity.
    InvalidSettingValueError
        When ``level`` is not a logger level.
    """
    settings = (settings or PluginSettings()).merged(**options)

    resolver = Resolver(LevelMap.build(settings.tags, settings.all_tags), merge=settings.merge_log_data)
    ignore = IgnoreTable(settings.ignore_paths)

    serializers = build_serializers(settings.serializers)
    logger: Logger
    if settings.instance is not None:
        settings.instance.merge_serializers(serializers)
        logger = settings.instance
    else:
        logger = StructLogger(name=settings.name or NAME, level=settings.level, serializers=serializers)

    def request_logger(request: LifecycleRequest) -> Logger:
        if request.logger is None:
            if ignore and request.path in ignore:
                request.logger = NOOP_LOGGER
            else:
                request.logger = logger.child({"req": request})
        return request.logger

    def on_request(request: LifecycleRequest) -> None:
        request.logger = None
        request_logger(request)

    def on_log(event: LifecycleEvent) -> None:
        if event.error is not None:
            logger.warn({"err": event.error})
        else:
            resolver.log(logger, event)

    def on_request_event(request: LifecycleRequest, event: LifecycleEvent, tags: dict[str, bool]) -> None:
        if event.channel == INTERNAL_CHANNEL and not tags.get("accept-encoding"):
            return

        current = request_logger(request)
        if event.error is not None and settings.is_log_event_enabled("request-error"):
            current.warn({"err": event.error}, "request error")
        elif event.channel == APP_CHANNEL:
            resolver.log(current, event)

    def on_response(request: LifecycleRequest) -> None:
        record: dict[str, Any] = {}
        if settings.log_payload:
            record["payload"] = request.payload
        if settings.log_route_tags:
            record["tags"] = list(request.route_tags)
        record["res"] = request.response
        record["response_time"] = request.response_time
        request_logger(request).info(record, "request completed")

    async def on_post_start(srv: Any) -> None:
        logger.info(dict(srv.info), "server started")

    async def on_post_stop(srv: Any) -> None:
        logger.info(dict(srv.info), "server stopped")

    server.decorate("server", "logger", lambda: logger)
    server.ext("on_request", on_request)
    server.events.on("log", on_log)
    server.events.on("request", on_request_event)

    enabled = [
        name
        for kind, name, handler in (
            ("on", "response", on_response),
            ("ext", "on_post_start", on_post_start),
            ("ext", "on_post_stop", on_post_stop),
        )
        if try_add_event(server, settings, kind, name, handler)
    ]

    _log.debug(
        "reqlog.registered",
        fallback=resolver.level_map.fallback.label,
        merge_log_data=resolver.merge,
        ignore_paths=list(ignore),
        log_events=enabled,
    )
    return logger


__all__ = ["NAME", "register", "try_add_event"]
