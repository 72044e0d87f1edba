"""Observability – severities, the logger level table and LevelMap.

``Severity`` is the closed set a tag may map to.  ``LevelTable`` is the
backend's full ordered level set (it adds ``fatal`` on top).  ``LevelMap``
is the validated tag → rank lookup consulted by :class:`Resolver`.
"""
from __future__ import annotations

import dataclasses
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping

from reqlog.config.validation import InvalidTagLevelConfigError

#: Rank returned for tags with no mapping.  Never a configured severity.
NO_MATCH = 0


class Severity(IntEnum):
    """Tag-mappable severities, ranked by their integer value."""

    TRACE = 10
    DEBUG = 20
    INFO = 30
    WARN = 40
    ERROR = 50

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, name: object) -> "Severity | None":
        """Return the severity called *name*, or ``None``."""
        if not isinstance(name, str):
            return None
        return _BY_NAME.get(name)


_BY_NAME: dict[str, Severity] = {s.label: s for s in Severity}

#: Builtin tag map: every severity name tags itself.
LEVEL_TAGS: Mapping[str, str] = MappingProxyType({s.label: s.label for s in Severity})


@dataclasses.dataclass(frozen=True)
class LevelTable:
    """Ordered level set of a logger: ``values[name]`` and ``labels[rank]``."""

    values: Mapping[str, int]

    @property
    def labels(self) -> Mapping[int, str]:
        return {rank: name for name, rank in self.values.items()}

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self.values, key=self.values.__getitem__))


DEFAULT_LEVELS = LevelTable(
    values=MappingProxyType({**{s.label: int(s) for s in Severity}, "fatal": 60})
)


class LevelMap:
    """Validated mapping from tag to severity rank, plus the fallback.

    Build with :meth:`build`; the instance is read-only afterwards and safe
    to share between concurrent resolutions.
    """

    __slots__ = ("_ranks", "_fallback")

    def __init__(self, ranks: Mapping[str, int], fallback: Severity) -> None:
        self._ranks: Mapping[str, int] = MappingProxyType(dict(ranks))
        self._fallback = fallback

    @classmethod
    def build(
        cls,
        overrides: Mapping[str, str] | None = None,
        fallback_name: str = "info",
    ) -> "LevelMap":
        """Merge *overrides* over :data:`LEVEL_TAGS` and validate.

        Raises
        ------
        InvalidTagLevelConfigError
            When any merged value, or *fallback_name*, is not a severity
            name.  All offenders are reported at once.
        """
        merged: dict[str, object] = {**LEVEL_TAGS, **(overrides or {})}
        invalid = {tag: level for tag, level in merged.items() if Severity.from_name(level) is None}
        fallback = Severity.from_name(fallback_name)
        if invalid or fallback is None:
            raise InvalidTagLevelConfigError(
                invalid,
                fallback=None if fallback is not None else fallback_name,
            )
        ranks = {tag: int(Severity.from_name(level)) for tag, level in merged.items()}  # type: ignore[arg-type]
        return cls(ranks, fallback)

    def rank_of(self, tag: str) -> int:
        """Rank mapped to *tag*, or :data:`NO_MATCH`."""
        return self._ranks.get(tag, NO_MATCH)

    @property
    def fallback(self) -> Severity:
        return self._fallback

    @property
    def fallback_rank(self) -> int:
        return int(self._fallback)

    def label_of(self, rank: int) -> str:
        return Severity(rank).label

    def __contains__(self, tag: object) -> bool:
        return tag in self._ranks

    def __len__(self) -> int:
        return len(self._ranks)

    def __repr__(self) -> str:
        return f"LevelMap(tags={len(self._ranks)}, fallback={self._fallback.label!r})"


__all__ = ["DEFAULT_LEVELS", "LEVEL_TAGS", "NO_MATCH", "LevelMap", "LevelTable", "Severity"]
