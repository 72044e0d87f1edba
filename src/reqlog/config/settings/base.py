"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, TypeVar

S = TypeVar("S", bound="Settings")


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings.

    Validation runs on construction, so an invalid instance never exists.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    def merged(self: S, **overrides: Any) -> S:
        """Copy with *overrides* applied (and validated again)."""
        if not overrides:
            return self
        return dataclasses.replace(self, **overrides)


__all__ = ["Settings"]
