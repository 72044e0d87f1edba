"""Observability – serializer wrapping and the standard serializer set.

User serializers for ``req`` and ``res`` are always composed over the
snapshot projectors, so they only ever see a :class:`Snapshot`, never the
live object.  Exceptions raised by a user serializer are not caught here.
"""
from __future__ import annotations

import traceback
from typing import Any, Mapping

from reqlog.kernel.errors import ReqlogError
from reqlog.observability.logging.protocol import Serializer
from reqlog.observability.logging.snapshot import as_request_value, as_response_value


def wrap_serializer(serializer: Serializer, projector: Serializer) -> Serializer:
    """Compose *serializer* over *projector*.

    Returns *projector* itself when the caller supplied no override (the two
    are the same object), otherwise ``lambda raw: serializer(projector(raw))``.
    """
    if serializer is projector:
        return projector

    def wrapped(raw: Any) -> Any:
        return serializer(projector(raw))

    wrapped.__name__ = f"wrapped_{getattr(serializer, '__name__', 'serializer')}"
    wrapped.__wrapped__ = serializer  # type: ignore[attr-defined]
    return wrapped


def wrap_request_serializer(serializer: Serializer | None = None) -> Serializer:
    return wrap_serializer(serializer or as_request_value, as_request_value)


def wrap_response_serializer(serializer: Serializer | None = None) -> Serializer:
    return wrap_serializer(serializer or as_response_value, as_response_value)


def serialize_error(err: Any) -> Any:
    """Standard ``err`` serializer: ``type``, ``message`` and ``stack``.

    :class:`ReqlogError` instances also contribute ``code`` and ``detail``.
    Anything that is not an exception is returned unchanged.
    """
    if not isinstance(err, BaseException):
        return err
    payload: dict[str, Any] = {
        "type": type(err).__name__,
        "message": str(err),
        "stack": "".join(traceback.format_exception(type(err), err, err.__traceback__)).rstrip(),
    }
    if isinstance(err, ReqlogError):
        payload["code"] = err.code
        if err.detail:
            payload["detail"] = err.detail
    return payload


def build_serializers(user: Mapping[str, Serializer] | None = None) -> dict[str, Serializer]:
    """Full serializer set for a logger.

    ``req``/``res`` are wrapped over the snapshot projectors, ``err``
    defaults to :func:`serialize_error`, and any other key is kept as given.
    """
    user = dict(user or {})
    serializers: dict[str, Serializer] = dict(user)
    serializers["req"] = wrap_request_serializer(user.get("req"))
    serializers["res"] = wrap_response_serializer(user.get("res"))
    serializers["err"] = user.get("err") or serialize_error
    return serializers


__all__ = [
    "build_serializers",
    "serialize_error",
    "wrap_request_serializer",
    "wrap_response_serializer",
    "wrap_serializer",
]
