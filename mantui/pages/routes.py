"""Navigation targets."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class PageKind(enum.Enum):
    HOME = "home"
    LIST = "list"
    READER = "reader"


@dataclass(frozen=True)
class Route:
    """Navigation target; ``command`` is only set for the reader."""

    kind: PageKind
    command: str | None = None

    @classmethod
    def home(cls) -> Route:
        return cls(PageKind.HOME)

    @classmethod
    def list(cls) -> Route:
        return cls(PageKind.LIST)

    @classmethod
    def reader(cls, command: str) -> Route:
        return cls(PageKind.READER, command)
