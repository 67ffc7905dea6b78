"""Debounced, latest-request-wins loader for section command listings.

Every request replaces a shared opaque token before its worker starts. The
worker sleeps for the debounce interval, re-reads the token and gives up when
a newer request has replaced it. Only the surviving worker calls the lister
and posts a ``LoadedEvent`` back through the controller channel. Work that is
already inside the lister is never interrupted. Its result carries the token
it was requested under, and the state reducer drops it once that token has
been replaced.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from collections.abc import Callable, Sequence

from .events import Event, LoadedEvent

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.2


class DebounceToken:
    """Lock-guarded holder of the most recently issued request token."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._token = uuid.uuid4()

    def replace(self) -> uuid.UUID:
        """Issue a fresh token, invalidating every earlier one."""
        token = uuid.uuid4()
        with self._lock:
            self._token = token
        return token

    def current(self) -> uuid.UUID:
        with self._lock:
            return self._token

    def is_current(self, token: uuid.UUID) -> bool:
        with self._lock:
            return self._token == token


class SectionLoader:
    """Spawn one short-lived worker per section request."""

    def __init__(
        self,
        send: Callable[[Event], None],
        list_section: Callable[[int], Sequence[str]],
        token: DebounceToken,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._send = send
        self._list_section = list_section
        self._token = token
        self._debounce_seconds = max(0.0, debounce_seconds)
        self._sleep = sleep

    def request(self, section: int) -> uuid.UUID:
        """Schedule a listing load for ``section`` and return its token."""
        token = self._token.replace()
        logger.debug("section %d requested (token %s)", section, token)
        worker = threading.Thread(
            target=self._worker,
            args=(section, token),
            name="mantui-section-loader",
            daemon=True,
        )
        worker.start()
        return token

    def cancel(self) -> None:
        """Invalidate any pending request without scheduling a new one."""
        self._token.replace()

    def _worker(self, section: int, token: uuid.UUID) -> None:
        self._sleep(self._debounce_seconds)
        if not self._token.is_current(token):
            logger.debug("section %d superseded before loading", section)
            return
        try:
            items = list(self._list_section(section))
        except Exception:
            logger.warning("listing section %d failed", section, exc_info=True)
            items = []
        logger.info("section %d loaded with %d entries", section, len(items))
        self._send(LoadedEvent(items=tuple(items), section=section, token=token))
