"""Event variants flowing through the controller channel.

``Event`` is a tagged union of frozen dataclasses: periodic ticks, decoded
keyboard and mouse input, and internal results posted by background work.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Union

MOUSE_DOWN = "down"
MOUSE_UP = "up"
MOUSE_DRAG = "drag"
MOUSE_SCROLL_UP = "scroll_up"
MOUSE_SCROLL_DOWN = "scroll_down"


@dataclass(frozen=True)
class TickEvent:
    """Periodic heartbeat emitted by the input producer."""


@dataclass(frozen=True)
class KeyEvent:
    """One decoded key press.

    ``code`` is either a single printable character or a key name such as
    ``ENTER``, ``ESC``, ``BACKSPACE`` or ``UP``.
    """

    code: str
    ctrl: bool = False
    alt: bool = False

    def is_char(self, ch: str | None = None) -> bool:
        """Return whether this is an unmodified printable character (optionally ``ch``)."""
        if self.ctrl or self.alt or len(self.code) != 1:
            return False
        return ch is None or self.code == ch

    def is_ctrl(self, ch: str) -> bool:
        return self.ctrl and self.code == ch


@dataclass(frozen=True)
class MouseEvent:
    """Mouse action at a 0-based terminal cell."""

    kind: str
    col: int
    row: int


@dataclass(frozen=True)
class LoadedEvent:
    """Command listing produced by the section loader.

    ``token`` is the debounce token the request was issued under; the
    listing is only applied while that token is still current.
    """

    items: tuple[str, ...]
    section: int
    token: uuid.UUID


Event = Union[TickEvent, KeyEvent, MouseEvent, LoadedEvent]

__all__ = [
    "Event",
    "KeyEvent",
    "LoadedEvent",
    "MOUSE_DOWN",
    "MOUSE_DRAG",
    "MOUSE_SCROLL_DOWN",
    "MOUSE_SCROLL_UP",
    "MOUSE_UP",
    "MouseEvent",
    "TickEvent",
]
