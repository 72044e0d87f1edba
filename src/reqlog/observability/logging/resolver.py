"""Observability – Resolver: lifecycle event → (severity, record) → logger."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from reqlog.observability.logging.levels import NO_MATCH, LevelMap, Severity
from reqlog.observability.logging.protocol import Logger, LogRecord


class Resolver:
    """Pick one severity per event from its tags and shape the record.

    The highest-ranked mapped tag wins.  When no tag is mapped the
    fallback severity of the :class:`LevelMap` is used; the fallback is
    never compared against a matched tag.

    With *merge* enabled a string payload becomes ``{"msg": data}`` and the
    payload is flattened next to ``tags``; otherwise the record is always
    ``{"tags": tags, "data": data}``.

    Instances hold no per-call state.
    """

    __slots__ = ("_levels", "_merge")

    def __init__(self, levels: LevelMap, merge: bool = False) -> None:
        self._levels = levels
        self._merge = merge

    @property
    def level_map(self) -> LevelMap:
        return self._levels

    @property
    def merge(self) -> bool:
        return self._merge

    def severity_of(self, tags: Iterable[str]) -> Severity:
        highest = NO_MATCH
        rank_of = self._levels.rank_of
        for tag in tags:
            rank = rank_of(tag)
            if rank > highest:
                highest = rank
        if highest > NO_MATCH:
            return Severity(highest)
        return self._levels.fallback

    def shape(self, tags: Any, data: Any) -> LogRecord:
        if not self._merge:
            return {"tags": tags, "data": data}
        if isinstance(data, str):
            data = {"msg": data}
        if isinstance(data, Mapping):
            return {"tags": tags, **data}
        if data is None:
            return {"tags": tags}
        return {"tags": tags, "data": data}

    def resolve(self, event: Any) -> tuple[Severity, LogRecord]:
        """Return the severity and shaped record for *event* (``tags``/``data``)."""
        tags = event.tags
        return self.severity_of(tags), self.shape(tags, event.data)

    def log(self, logger: Logger, event: Any) -> Severity:
        """Resolve *event* and emit it on *logger*; returns the severity used."""
        severity, record = self.resolve(event)
        getattr(logger, severity.label)(record)
        return severity


__all__ = ["Resolver"]
