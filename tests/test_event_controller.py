"""Tests for the named-listener registry and fan-out dispatch."""

from __future__ import annotations

import threading
import unittest

from mantui.events import ChannelClosedError, EventController, KeyEvent, TickEvent
from mantui.state import AppState


class EventControllerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.controller = EventController()
        self.state = AppState()

    def test_dispatch_calls_every_listener_in_insertion_order(self) -> None:
        calls: list[str] = []
        self.controller.add_listener("a", lambda c, s, e: calls.append("a"))
        self.controller.add_listener("b", lambda c, s, e: calls.append("b"))
        self.controller.add_listener("c", lambda c, s, e: calls.append("c"))

        self.controller.dispatch(self.state, TickEvent())

        self.assertEqual(calls, ["a", "b", "c"])

    def test_listener_receives_controller_state_and_event(self) -> None:
        seen = []
        self.controller.add_listener("probe", lambda c, s, e: seen.append((c, s, e)))
        event = KeyEvent("x")

        self.controller.dispatch(self.state, event)

        self.assertEqual(seen, [(self.controller, self.state, event)])

    def test_add_listener_replaces_existing_id_in_place(self) -> None:
        calls: list[str] = []
        self.controller.add_listener("a", lambda c, s, e: calls.append("old-a"))
        self.controller.add_listener("b", lambda c, s, e: calls.append("b"))
        self.controller.add_listener("a", lambda c, s, e: calls.append("new-a"))

        self.controller.dispatch(self.state, TickEvent())

        self.assertEqual(calls, ["new-a", "b"])
        self.assertEqual(self.controller.listener_ids(), ["a", "b"])

    def test_remove_listener_is_idempotent(self) -> None:
        self.controller.add_listener("a", lambda c, s, e: None)
        self.controller.remove_listener("a")
        self.controller.remove_listener("a")
        self.controller.remove_listener("never-added")
        self.assertFalse(self.controller.has_listener("a"))

    def test_mutation_during_dispatch_uses_snapshot(self) -> None:
        calls: list[str] = []

        def first(controller, state, event) -> None:
            calls.append("first")
            controller.remove_listener("second")
            controller.add_listener("third", lambda c, s, e: calls.append("third"))

        self.controller.add_listener("first", first)
        self.controller.add_listener("second", lambda c, s, e: calls.append("second"))

        self.controller.dispatch(self.state, TickEvent())
        self.assertEqual(calls, ["first", "second"])

        calls.clear()
        self.controller.dispatch(self.state, TickEvent())
        self.assertEqual(calls, ["first", "third"])

    def test_listener_may_enqueue_events_without_deadlock(self) -> None:
        seen: list[object] = []

        def on_event(controller, state, event) -> None:
            seen.append(event)
            if isinstance(event, KeyEvent):
                controller.send(TickEvent())

        self.controller.add_listener("echo", on_event)
        self.controller.send(KeyEvent("a"))

        self.assertEqual(self.controller.recv_and_dispatch(self.state, timeout=1.0), KeyEvent("a"))
        self.assertEqual(self.controller.recv_and_dispatch(self.state, timeout=1.0), TickEvent())
        self.assertEqual(seen, [KeyEvent("a"), TickEvent()])

    def test_recv_and_dispatch_returns_none_on_timeout(self) -> None:
        self.assertIsNone(self.controller.recv_and_dispatch(self.state, timeout=0.01))

    def test_recv_and_dispatch_raises_after_close(self) -> None:
        self.controller.close()
        with self.assertRaises(ChannelClosedError):
            self.controller.recv_and_dispatch(self.state, timeout=1.0)
        with self.assertRaises(ChannelClosedError):
            self.controller.recv_and_dispatch(self.state, timeout=1.0)

    def test_send_after_close_is_dropped(self) -> None:
        self.controller.close()
        self.controller.send(TickEvent())
        self.assertTrue(self.controller.closed)
        with self.assertRaises(ChannelClosedError):
            self.controller.recv_and_dispatch(self.state, timeout=1.0)

    def test_send_is_safe_from_other_threads(self) -> None:
        count = []
        self.controller.add_listener("count", lambda c, s, e: count.append(e))
        threads = [threading.Thread(target=self.controller.send, args=(TickEvent(),)) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for _ in range(8):
            self.controller.recv_and_dispatch(self.state, timeout=1.0)
        self.assertEqual(len(count), 8)


if __name__ == "__main__":
    unittest.main()
