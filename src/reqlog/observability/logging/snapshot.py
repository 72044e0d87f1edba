"""Observability – request/response snapshots.

A snapshot is a read-only :class:`~collections.abc.Mapping` whose keys are
exactly the fields its class declares in ``FIELDS``.  The live object it was
taken from stays reachable only through :meth:`Snapshot.raw_handle`, so key
iteration, ``dict(snapshot)``, JSON rendering and copies never include it.

The field schema lives on the class and every instance is two slots (a
value tuple and the raw handle), so taking a snapshot per request is cheap.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, ClassVar, Iterator, Mapping

_EMPTY_HEADERS: Mapping[str, str] = MappingProxyType({})


def _freeze(value: Any) -> Any:
    return MappingProxyType(value) if isinstance(value, dict) else value


def _thaw(value: Any) -> Any:
    return dict(value) if isinstance(value, MappingProxyType) else value


class Snapshot(Mapping[str, Any]):
    """Base class: subclasses only declare ``FIELDS`` and ``DEFAULTS``."""

    __slots__ = ("_values", "_raw")

    FIELDS: ClassVar[tuple[str, ...]] = ()
    DEFAULTS: ClassVar[Mapping[str, Any]] = MappingProxyType({})
    _INDEX: ClassVar[Mapping[str, int]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._INDEX = MappingProxyType({name: i for i, name in enumerate(cls.FIELDS)})

    def __init__(self, raw: Any = None, **values: Any) -> None:
        unknown = set(values) - set(self._INDEX)
        if unknown:
            raise TypeError(f"{type(self).__name__} has no field(s) {sorted(unknown)}")
        defaults = self.DEFAULTS
        object.__setattr__(
            self,
            "_values",
            tuple(_freeze(values.get(name, defaults.get(name))) for name in self.FIELDS),
        )
        object.__setattr__(self, "_raw", raw)

    @classmethod
    def _from_values(cls, values: tuple[Any, ...]) -> "Snapshot":
        return cls(**dict(zip(cls.FIELDS, values)))

    def raw_handle(self) -> Any:
        """The live object this snapshot was taken from."""
        return self._raw

    def to_dict(self) -> dict[str, Any]:
        return dict(zip(self.FIELDS, map(_thaw, self._values)))

    # Mapping interface

    def __getitem__(self, key: str) -> Any:
        try:
            return self._values[self._INDEX[key]]
        except KeyError:
            raise KeyError(key) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self.FIELDS)

    def __len__(self) -> int:
        return len(self.FIELDS)

    # attribute access and immutability

    def __getattr__(self, name: str) -> Any:
        index = type(self)._INDEX.get(name)
        if index is None or name.startswith("_"):
            raise AttributeError(name)
        return self._values[index]

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __reduce__(self) -> tuple[Any, ...]:
        # copies and pickles carry the fields only, never the raw handle
        return (type(self)._from_values, (tuple(_thaw(v) for v in self._values),))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in zip(self.FIELDS, self._values))
        return f"{type(self).__name__}({fields})"


class RequestSnapshot(Snapshot):
    __slots__ = ()

    FIELDS = ("id", "method", "url", "headers", "remote_address", "remote_port")
    DEFAULTS = MappingProxyType({
        "id": "",
        "method": "",
        "url": "",
        "headers": _EMPTY_HEADERS,
        "remote_address": None,
        "remote_port": None,
    })


class ResponseSnapshot(Snapshot):
    __slots__ = ()

    FIELDS = ("status_code", "header")
    DEFAULTS = MappingProxyType({"status_code": 0, "header": ""})


def as_request_value(request: Any) -> RequestSnapshot:
    """Default ``req`` projector: snapshot a :class:`LifecycleRequest`-like object."""
    headers = getattr(request, "headers", None)
    return RequestSnapshot(
        raw=getattr(request, "raw", None),
        id=request.id,
        method=request.method,
        url=request.url,
        headers=dict(headers) if headers else _EMPTY_HEADERS,
        remote_address=getattr(request, "remote_address", None),
        remote_port=getattr(request, "remote_port", None),
    )


def as_response_value(response: Any) -> ResponseSnapshot:
    """Default ``res`` projector: snapshot a :class:`LifecycleResponse`-like object."""
    return ResponseSnapshot(
        raw=response,
        status_code=response.status_code,
        header=getattr(response, "header", "") or "",
    )


__all__ = [
    "RequestSnapshot",
    "ResponseSnapshot",
    "Snapshot",
    "as_request_value",
    "as_response_value",
]
