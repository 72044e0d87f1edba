"""Host – LifecycleServer, an in-process request lifecycle event source.

Handlers subscribe to events (``log``, ``request``, ``response``) with
``server.events.on`` and to extension points (``on_request``,
``on_post_start``, ``on_post_stop``) with ``server.ext``.  Adapters such as
:class:`~reqlog.adapters.fastapi.FastAPIRequestLoggingMiddleware` drive it.
"""
from __future__ import annotations

import inspect
import os
import socket
import uuid
from collections import defaultdict
from typing import Any, Callable, Iterable

from reqlog.host.events import (
    ERROR_CHANNEL,
    INTERNAL_CHANNEL,
    LifecycleEvent,
    LifecycleRequest,
    LifecycleResponse,
    now_ms,
)

EVENTS = ("log", "request", "response")
EXT_POINTS = ("on_request", "on_post_start", "on_post_stop")

Handler = Callable[..., Any]


class EventBus:
    """Named synchronous events; handlers run in subscription order."""

    def __init__(self, names: Iterable[str] = EVENTS) -> None:
        self._names = frozenset(names)
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def on(self, name: str, handler: Handler) -> None:
        if name not in self._names:
            raise ValueError(f"Unknown event {name!r}; expected one of {sorted(self._names)}")
        self._handlers[name].append(handler)

    def emit(self, name: str, *args: Any) -> None:
        for handler in list(self._handlers.get(name, ())):
            handler(*args)

    def has_listeners(self, name: str) -> bool:
        return bool(self._handlers.get(name))


class LifecycleServer:
    """Minimal server lifecycle: decorations, extension points and events."""

    def __init__(self, *, host: str = "localhost", port: int = 0, protocol: str = "http") -> None:
        created = now_ms()
        self.events = EventBus()
        self._ext: dict[str, list[Handler]] = {point: [] for point in EXT_POINTS}
        self._decorations: dict[str, Handler] = {}
        self.info: dict[str, Any] = {
            "id": f"{socket.gethostname()}:{os.getpid()}:{int(created):x}",
            "created": created,
            "started": 0,
            "host": host,
            "port": port,
            "protocol": protocol,
            "uri": f"{protocol}://{host}:{port}",
        }

    # -- decorations ---------------------------------------------------

    def decorate(self, target: str, name: str, method: Handler) -> None:
        """Expose *method* as ``server.<name>()``."""
        if target != "server":
            raise ValueError(f"Unsupported decoration target {target!r}")
        if name in self._decorations or hasattr(type(self), name):
            raise ValueError(f"Server decoration {name!r} already defined")
        self._decorations[name] = method

    def __getattr__(self, name: str) -> Any:
        decorations = self.__dict__.get("_decorations", {})
        if name in decorations:
            return decorations[name]
        raise AttributeError(name)

    # -- extension points ----------------------------------------------

    def ext(self, point: str, handler: Handler) -> None:
        if point not in self._ext:
            raise ValueError(f"Unknown extension point {point!r}; expected one of {EXT_POINTS}")
        self._ext[point].append(handler)

    async def run_ext(self, point: str, *args: Any) -> None:
        for handler in list(self._ext[point]):
            result = handler(*args)
            if inspect.isawaitable(result):
                await result

    # -- lifecycle -----------------------------------------------------

    async def start(self) -> None:
        self.info["started"] = now_ms()
        await self.run_ext("on_post_start", self)

    async def stop(self) -> None:
        await self.run_ext("on_post_stop", self)
        self.info["started"] = 0

    # -- requests ------------------------------------------------------

    def request(
        self,
        method: str,
        url: str,
        *,
        path: str | None = None,
        headers: dict[str, str] | None = None,
        request_id: str | None = None,
        **fields: Any,
    ) -> LifecycleRequest:
        """Create a request bound to this server (no extension runs yet)."""
        return LifecycleRequest(
            id=request_id or uuid.uuid4().hex,
            method=method.upper(),
            url=url,
            path=path if path is not None else url.split("?", 1)[0],
            headers=dict(headers or {}),
            server=self,
            **fields,
        )

    async def on_request(self, request: LifecycleRequest) -> LifecycleRequest:
        await self.run_ext("on_request", request)
        return request

    def respond(self, request: LifecycleRequest, response: LifecycleResponse) -> None:
        """Record *response* on *request* and emit ``response``."""
        request.response = response
        request.responded = now_ms()
        self.events.emit("response", request)

    def fail(self, request: LifecycleRequest, error: BaseException, tags: Iterable[str] = ("handler", "error")) -> None:
        """Emit a ``request`` event on the ``error`` channel."""
        event = LifecycleEvent(tuple(tags), None, error, ERROR_CHANNEL, request_id=request.id)
        self.emit_request(request, event)

    def internal(self, request: LifecycleRequest, tags: Iterable[str], data: Any = None) -> None:
        """Emit a framework-internal ``request`` event."""
        event = LifecycleEvent.create(tuple(tags), data, channel=INTERNAL_CHANNEL, request_id=request.id)
        self.emit_request(request, event)

    def emit_request(self, request: LifecycleRequest, event: LifecycleEvent) -> None:
        if not self.events.has_listeners("request"):
            return
        self.events.emit("request", request, event, event.tag_map)

    # -- server logs ---------------------------------------------------

    def log(self, tags: str | Iterable[str] | None, data: Any = None) -> None:
        """Emit a ``log`` event; an exception passed as *data* becomes ``error``."""
        if not self.events.has_listeners("log"):
            return
        self.events.emit("log", LifecycleEvent.create(tags, data))


__all__ = ["EVENTS", "EXT_POINTS", "EventBus", "LifecycleServer"]
