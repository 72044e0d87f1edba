"""FastAPI adapter – ASGI middleware driving a :class:`LifecycleServer`.

* ``lifespan``: ``on_post_start`` runs before ``lifespan.startup.complete``
  is forwarded, ``on_post_stop`` before ``lifespan.shutdown.complete``.
* ``http``: a :class:`LifecycleRequest` is built from the scope, the
  ``on_request`` extension runs, the request is exposed as
  ``request.state.lifecycle`` and ``response`` is emitted once the app is
  done.  Unhandled exceptions are reported on the ``error`` channel and
  re-raised.
"""
from __future__ import annotations

import json
import uuid
from typing import TYPE_CHECKING, Any

from reqlog.config.settings import PluginSettings
from reqlog.host import LifecycleRequest, LifecycleResponse, LifecycleServer
from reqlog.plugin import register

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send


def _require_fastapi() -> None:
    try:
        import fastapi  # noqa: F401
    except ImportError as exc:
        raise ImportError(
            "Install 'reqlog[fastapi]' to use the FastAPI adapter"
        ) from exc


def _decode_headers(raw_headers: list[tuple[bytes, bytes]]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for name, value in raw_headers:
        key = name.decode("latin-1").lower()
        text = value.decode("latin-1")
        headers[key] = f"{headers[key]}, {text}" if key in headers else text
    return headers


def _decode_payload(body: bytes, content_type: str) -> Any:
    if not body:
        return None
    text = body.decode("utf-8", "replace")
    if content_type.startswith("application/json"):
        try:
            return json.loads(text)
        except ValueError:
            return text
    return text


class FastAPIRequestLoggingMiddleware:
    """Feed ASGI ``http`` and ``lifespan`` traffic into *server*.

    Parameters
    ----------
    app:
        The inner ASGI application.
    server:
        The :class:`LifecycleServer` the logging plugin is registered on.
    request_id_header:
        Header whose value becomes the request id; a uuid4 hex otherwise.
    capture_payload:
        Buffer the request body into ``LifecycleRequest.payload``.
    """

    def __init__(
        self,
        app: "ASGIApp",
        server: LifecycleServer,
        request_id_header: str = "X-Request-ID",
        capture_payload: bool = False,
    ) -> None:
        _require_fastapi()
        self.app = app
        self.server = server
        self._id_header = request_id_header.lower()
        self._capture_payload = capture_payload

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(scope, receive, send)
        elif scope["type"] == "http":
            await self._http(scope, receive, send)
        else:
            await self.app(scope, receive, send)

    async def _lifespan(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        server = self.server

        async def send_wrapper(message: "Message") -> None:
            if message["type"] == "lifespan.startup.complete":
                await server.start()
            elif message["type"] == "lifespan.shutdown.complete":
                await server.stop()
            await send(message)

        await self.app(scope, receive, send_wrapper)

    def _build_request(self, scope: "Scope") -> LifecycleRequest:
        headers = _decode_headers(scope.get("headers", []))
        path = scope.get("path", "/")
        query = scope.get("query_string", b"").decode("latin-1")
        client = scope.get("client") or (None, None)
        return self.server.request(
            scope["method"],
            f"{path}?{query}" if query else path,
            path=path,
            headers=headers,
            request_id=headers.get(self._id_header) or uuid.uuid4().hex,
            remote_address=client[0],
            remote_port=client[1],
            raw=scope,
        )

    async def _http(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        server = self.server
        request = self._build_request(scope)
        await server.on_request(request)
        scope.setdefault("state", {})["lifecycle"] = request

        body = bytearray()
        response: LifecycleResponse | None = None

        async def receive_wrapper() -> "Message":
            message = await receive()
            if message["type"] == "http.request":
                body.extend(message.get("body", b""))
            return message

        async def send_wrapper(message: "Message") -> None:
            nonlocal response
            if message["type"] == "http.response.start":
                response = LifecycleResponse(
                    status_code=message["status"],
                    headers=list(_decode_headers(message.get("headers", [])).items()),
                    raw=message,
                )
            await send(message)

        try:
            await self.app(scope, receive_wrapper if self._capture_payload else receive, send_wrapper)
        except Exception as exc:
            server.fail(request, exc)
            raise
        finally:
            route = scope.get("route")
            request.route_tags = tuple(getattr(route, "tags", None) or ())
            if self._capture_payload:
                request.payload = _decode_payload(bytes(body), request.headers.get("content-type", ""))
            server.respond(request, response or LifecycleResponse(status_code=500))


def install(
    app: Any,
    settings: PluginSettings | None = None,
    *,
    server: LifecycleServer | None = None,
    request_id_header: str = "X-Request-ID",
    **options: Any,
) -> LifecycleServer:
    """Register request logging and add the middleware to a FastAPI *app*.

    The server is also stored as ``app.state.lifecycle_server``.
    """
    _require_fastapi()
    settings = (settings or PluginSettings()).merged(**options)
    server = server or LifecycleServer()
    register(server, settings)
    app.add_middleware(
        FastAPIRequestLoggingMiddleware,
        server=server,
        request_id_header=request_id_header,
        capture_payload=settings.log_payload,
    )
    app.state.lifecycle_server = server
    return server


__all__ = ["FastAPIRequestLoggingMiddleware", "install"]
