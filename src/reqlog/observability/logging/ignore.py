"""Observability – IgnoreTable."""
from __future__ import annotations

from typing import Iterable, Iterator


class IgnoreTable:
    """Request paths that get no per-request logger at all.

    Matching is exact string equality; no glob or regex semantics.
    """

    __slots__ = ("_paths",)

    def __init__(self, paths: Iterable[str] | None = None) -> None:
        self._paths: frozenset[str] = frozenset(paths or ())

    def contains(self, path: str) -> bool:
        return path in self._paths

    __contains__ = contains

    def __bool__(self) -> bool:
        return bool(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._paths))

    def __repr__(self) -> str:
        return f"IgnoreTable({sorted(self._paths)!r})"


__all__ = ["IgnoreTable"]
