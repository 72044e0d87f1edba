"""Kernel – framework-agnostic building blocks."""

from reqlog.kernel.errors import ReqlogError

__all__ = ["ReqlogError"]
