"""Background input producer feeding the event channel.

A single daemon thread polls the terminal for input and interleaves periodic
tick events. The poll timeout is always the time left until the next tick,
so input is forwarded immediately and ticks stay evenly spaced.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from .types import Event, TickEvent

logger = logging.getLogger(__name__)

DEFAULT_TICK_SECONDS = 0.1


class InputProducer:
    """Poll OS input and emit ``KeyEvent``/``MouseEvent``/``TickEvent`` values."""

    def __init__(
        self,
        send: Callable[[Event], None],
        stdin_fd: int,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        *,
        read_event: Callable[[int, int | None], Event | None] | None = None,
        clock: Callable[[], float] = time.monotonic,
        on_error: Callable[[], None] | None = None,
    ) -> None:
        self._send = send
        self._stdin_fd = stdin_fd
        self._tick_seconds = max(0.001, tick_seconds)
        if read_event is None:
            from ..input import read_event
        self._read_event = read_event
        self._clock = clock
        self._on_error = on_error
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def stop(self) -> None:
        self._stop.set()

    def run(self) -> None:
        """Loop until ``stop()``; ticks are emitted once per elapsed interval."""
        last_tick = self._clock()
        while not self._stop.is_set():
            remaining = self._tick_seconds - (self._clock() - last_tick)
            timeout_ms = max(0, int(remaining * 1000))
            try:
                event = self._read_event(self._stdin_fd, timeout_ms)
            except EOFError:
                logger.info("input reached end of file; closing event channel")
                self._fail()
                return
            except OSError:
                logger.exception("input source failed; closing event channel")
                self._fail()
                return
            if event is not None:
                self._send(event)

            if self._clock() - last_tick >= self._tick_seconds:
                self._send(TickEvent())
                last_tick = self._clock()

    def _fail(self) -> None:
        if self._on_error is not None:
            self._on_error()

    def start(self) -> threading.Thread:
        """Run the producer loop on a daemon thread and return it."""
        worker = threading.Thread(
            target=self.run,
            name="mantui-input",
            daemon=True,
        )
        self._thread = worker
        worker.start()
        return worker
