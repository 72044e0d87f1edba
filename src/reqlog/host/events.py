"""Host – lifecycle event, request and response value types."""
from __future__ import annotations

import dataclasses
import time
from http import HTTPStatus
from typing import Any, Iterable

#: Channels of ``request`` events.
APP_CHANNEL = "app"
INTERNAL_CHANNEL = "internal"
ERROR_CHANNEL = "error"


def now_ms() -> float:
    return time.time() * 1000


def normalize_tags(tags: str | Iterable[str] | None) -> tuple[str, ...]:
    """Tags as a de-duplicated tuple in first-seen order."""
    if tags is None:
        return ()
    if isinstance(tags, str):
        return (tags,)
    return tuple(dict.fromkeys(tags))


@dataclasses.dataclass(frozen=True)
class LifecycleEvent:
    """One ``log`` or ``request`` notification."""

    tags: tuple[str, ...] = ()
    data: Any = None
    error: BaseException | None = None
    channel: str = APP_CHANNEL
    timestamp: float = dataclasses.field(default_factory=now_ms)
    request_id: str | None = None

    @classmethod
    def create(
        cls,
        tags: str | Iterable[str] | None,
        data: Any = None,
        *,
        channel: str = APP_CHANNEL,
        request_id: str | None = None,
    ) -> "LifecycleEvent":
        """Build an event; an exception passed as *data* becomes ``error``."""
        if isinstance(data, BaseException):
            return cls(normalize_tags(tags), None, data, channel, request_id=request_id)
        return cls(normalize_tags(tags), data, None, channel, request_id=request_id)

    @property
    def tag_map(self) -> dict[str, bool]:
        return dict.fromkeys(self.tags, True)


@dataclasses.dataclass
class LifecycleResponse:
    """Response as seen when its head was sent."""

    status_code: int
    headers: list[tuple[str, str]] = dataclasses.field(default_factory=list)
    reason: str = ""
    http_version: str = "1.1"
    raw: Any = dataclasses.field(default=None, repr=False, compare=False)

    @property
    def header(self) -> str:
        """The response head as sent on the wire, status line included."""
        reason = self.reason
        if not reason:
            try:
                reason = HTTPStatus(self.status_code).phrase
            except ValueError:
                reason = ""
        lines = [f"HTTP/{self.http_version} {self.status_code} {reason}".rstrip()]
        lines.extend(f"{name}: {value}" for name, value in self.headers)
        return "\r\n".join(lines) + "\r\n\r\n"


@dataclasses.dataclass
class LifecycleRequest:
    """A request travelling through a :class:`LifecycleServer`.

    ``logger`` is assigned by the ``on_request`` extension and ``response``
    and ``responded`` once the response completes.
    """

    id: str
    method: str
    url: str
    path: str
    headers: dict[str, str] = dataclasses.field(default_factory=dict)
    remote_address: str | None = None
    remote_port: int | None = None
    route_tags: tuple[str, ...] = ()
    payload: Any = None
    received: float = dataclasses.field(default_factory=now_ms)
    responded: float = 0.0
    raw: Any = dataclasses.field(default=None, repr=False, compare=False)
    response: LifecycleResponse | None = None
    logger: Any = dataclasses.field(default=None, repr=False, compare=False)
    server: Any = dataclasses.field(default=None, repr=False, compare=False)

    @property
    def response_time(self) -> float:
        return self.responded - self.received if self.responded else 0.0

    def log(self, tags: str | Iterable[str] | None, data: Any = None) -> None:
        """Emit a ``request`` event on the ``app`` channel."""
        event = LifecycleEvent.create(tags, data, channel=APP_CHANNEL, request_id=self.id)
        self.server.emit_request(self, event)


__all__ = [
    "APP_CHANNEL",
    "ERROR_CHANNEL",
    "INTERNAL_CHANNEL",
    "LifecycleEvent",
    "LifecycleRequest",
    "LifecycleResponse",
    "normalize_tags",
    "now_ms",
]
