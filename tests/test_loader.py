"""Tests for the debounced section loader and its token semantics."""

from __future__ import annotations

import threading
import time
import unittest
from queue import Empty, Queue

from mantui.events import LoadedEvent
from mantui.loader import DebounceToken, SectionLoader


def _collect(queue: Queue, timeout: float) -> list[object]:
    items: list[object] = []
    deadline = time.monotonic() + timeout
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return items
        try:
            items.append(queue.get(timeout=remaining))
        except Empty:
            return items


class DebounceTokenTests(unittest.TestCase):
    def test_replace_invalidates_previous_token(self) -> None:
        token = DebounceToken()
        first = token.replace()
        second = token.replace()

        self.assertNotEqual(first, second)
        self.assertFalse(token.is_current(first))
        self.assertTrue(token.is_current(second))
        self.assertEqual(token.current(), second)


class SectionLoaderTests(unittest.TestCase):
    def test_rapid_requests_deliver_only_latest_section(self) -> None:
        sent: Queue = Queue()
        calls: list[int] = []

        def list_section(section: int) -> list[str]:
            calls.append(section)
            return [f"cmd{section}"]

        loader = SectionLoader(sent.put, list_section, DebounceToken(), debounce_seconds=0.05)
        loader.request(1)
        loader.request(2)
        latest = loader.request(3)

        self.assertEqual(_collect(sent, 0.5), [LoadedEvent(items=("cmd3",), section=3, token=latest)])
        self.assertEqual(calls, [3])

    def test_request_replaces_token_before_worker_runs(self) -> None:
        token = DebounceToken()
        gate = threading.Event()
        loader = SectionLoader(lambda event: None, lambda section: [], token, sleep=lambda s: gate.wait(1.0))

        issued = loader.request(7)
        self.assertTrue(token.is_current(issued))
        gate.set()

    def test_cancel_discards_pending_request(self) -> None:
        sent: Queue = Queue()
        loader = SectionLoader(sent.put, lambda section: ["x"], DebounceToken(), debounce_seconds=0.05)

        loader.request(1)
        loader.cancel()

        self.assertEqual(_collect(sent, 0.3), [])

    def test_failing_lister_yields_empty_listing(self) -> None:
        sent: Queue = Queue()

        def broken(section: int) -> list[str]:
            raise RuntimeError("apropos missing")

        loader = SectionLoader(sent.put, broken, DebounceToken(), debounce_seconds=0.0)
        with self.assertLogs("mantui.loader", level="WARNING"):
            issued = loader.request(4)
            event = sent.get(timeout=1.0)

        self.assertEqual(event, LoadedEvent(items=(), section=4, token=issued))

    def test_lister_runs_without_holding_token_lock(self) -> None:
        sent: Queue = Queue()
        token = DebounceToken()
        entered = threading.Event()
        release = threading.Event()

        def slow(section: int) -> list[str]:
            entered.set()
            release.wait(1.0)
            return ["slow"]

        loader = SectionLoader(sent.put, slow, token, debounce_seconds=0.0)
        issued = loader.request(1)
        self.assertTrue(entered.wait(1.0))
        # A new request while the fetch is in flight must not block.
        loader.cancel()
        release.set()

        event = sent.get(timeout=1.0)
        self.assertEqual(event, LoadedEvent(items=("slow",), section=1, token=issued))
        self.assertFalse(token.is_current(event.token))


if __name__ == "__main__":
    unittest.main()
