"""Event bus: event variants, the dispatching controller, and the input producer."""

from .controller import ChannelClosedError, EventController, Listener
from .producer import InputProducer
from .types import (
    MOUSE_DOWN,
    MOUSE_DRAG,
    MOUSE_SCROLL_DOWN,
    MOUSE_SCROLL_UP,
    MOUSE_UP,
    Event,
    KeyEvent,
    LoadedEvent,
    MouseEvent,
    TickEvent,
)

__all__ = [
    "ChannelClosedError",
    "Event",
    "EventController",
    "InputProducer",
    "KeyEvent",
    "Listener",
    "LoadedEvent",
    "MOUSE_DOWN",
    "MOUSE_DRAG",
    "MOUSE_SCROLL_DOWN",
    "MOUSE_SCROLL_UP",
    "MOUSE_UP",
    "MouseEvent",
    "TickEvent",
]
