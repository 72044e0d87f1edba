"""FastAPI adapter – request logging middleware, installer and deps."""
from reqlog.adapters.fastapi.deps import LifecycleRequestDep, lifecycle_request
from reqlog.adapters.fastapi.middleware import FastAPIRequestLoggingMiddleware, install

__all__ = [
    "FastAPIRequestLoggingMiddleware",
    "LifecycleRequestDep",
    "install",
    "lifecycle_request",
]
