"""Event channel and named-listener registry.

The controller is the single fan-out point of the runtime: every event read
from the channel is handed to every registered listener, in registration
order. Listeners may add/remove listeners or enqueue events while being
dispatched; iteration always runs over a snapshot of the registry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from queue import Empty, Queue
from typing import TYPE_CHECKING

from .types import Event

if TYPE_CHECKING:
    from ..state import AppState

logger = logging.getLogger(__name__)

Listener = Callable[["EventController", "AppState", Event], None]

_CLOSED = object()


class ChannelClosedError(RuntimeError):
    """Raised when the event channel has been closed and drained."""


class EventController:
    """Owns the event channel and the ``id -> callback`` listener registry."""

    def __init__(self) -> None:
        self._listeners: dict[str, Listener] = {}
        self._channel: Queue[object] = Queue()
        self._closed = False

    def add_listener(self, listener_id: str, callback: Listener) -> None:
        """Register ``callback`` under ``listener_id``, replacing any previous one."""
        self._listeners[listener_id] = callback

    def remove_listener(self, listener_id: str) -> None:
        """Drop the listener registered under ``listener_id`` if present."""
        self._listeners.pop(listener_id, None)

    def has_listener(self, listener_id: str) -> bool:
        return listener_id in self._listeners

    def listener_ids(self) -> list[str]:
        return list(self._listeners)

    def send(self, event: Event) -> None:
        """Enqueue ``event``; safe to call from any thread."""
        if self._closed:
            return
        self._channel.put(event)

    def close(self) -> None:
        """Close the channel; the next blocking receive raises ``ChannelClosedError``."""
        if self._closed:
            return
        self._closed = True
        self._channel.put(_CLOSED)

    @property
    def closed(self) -> bool:
        return self._closed

    def dispatch(self, state: AppState, event: Event) -> None:
        """Invoke every listener with ``(controller, state, event)``."""
        snapshot = list(self._listeners.items())
        logger.debug("dispatch %r to %d listeners", event, len(snapshot))
        for _listener_id, callback in snapshot:
            callback(self, state, event)

    def recv_and_dispatch(self, state: AppState, timeout: float | None = None) -> Event | None:
        """Block for one event, dispatch it, and return it.

        Returns ``None`` when ``timeout`` elapses without an event. Raises
        ``ChannelClosedError`` once the channel has been closed.
        """
        try:
            item = self._channel.get(timeout=timeout)
        except Empty:
            return None
        if item is _CLOSED:
            # Keep the sentinel available for any later receive.
            self._channel.put(_CLOSED)
            raise ChannelClosedError("event channel closed")
        self.dispatch(state, item)
        return item
