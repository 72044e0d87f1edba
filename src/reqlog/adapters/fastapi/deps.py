"""FastAPI adapter – dependency exposing the current LifecycleRequest.

Usage::

    @app.get("/items")
    async def items(lifecycle: LifecycleRequestDep) -> dict[str, str]:
        lifecycle.log(["audit"], "listed items")
        return {"request_id": lifecycle.id}
"""
from typing import Annotated, Any

from reqlog.host import LifecycleRequest


def _lifecycle_dep_factory():  # noqa: ANN202
    """Return the ``lifecycle_request`` dependency bound to FastAPI's ``Request``."""
    from reqlog.adapters.fastapi.middleware import _require_fastapi

    _require_fastapi()
    from fastapi import Request  # type: ignore[import-untyped]

    def lifecycle_request(request: Request) -> LifecycleRequest:
        return request.state.lifecycle

    return lifecycle_request


def _make_lifecycle_dep() -> Any:
    try:
        from fastapi import Depends  # type: ignore[import-untyped]
    except ImportError:
        return None, None
    fn = _lifecycle_dep_factory()
    return fn, Annotated[LifecycleRequest, Depends(fn)]


# Build at import time (no-op if fastapi absent)
lifecycle_request, LifecycleRequestDep = _make_lifecycle_dep()

__all__ = ["LifecycleRequestDep", "lifecycle_request"]
