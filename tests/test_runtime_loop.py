"""Tests for the draw/dispatch main loop and viewer bootstrap wiring."""

from __future__ import annotations

from contextlib import contextmanager
import unittest
from unittest import mock

from mantui.config import ViewerConfig
from mantui.events import ChannelClosedError, EventController, KeyEvent, TickEvent
from mantui.pages import PageKind
from mantui.runtime import run_main_loop, run_viewer
from mantui.runtime.app import initial_route
from mantui.runtime.app import run_main_loop as real_main_loop
from mantui.state import AppState, HomePageState, ReaderPageState
from mantui.ui_theme import PLAIN_THEME


class _FakeTerminal:
    instances: list["_FakeTerminal"] = []

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.entered = False
        self.exited = False
        _FakeTerminal.instances.append(self)

    @contextmanager
    def raw_mode(self):
        self.entered = True
        try:
            yield
        finally:
            self.exited = True


class _FakeProducer:
    def __init__(self, send, stdin_fd, tick_seconds, on_error=None) -> None:
        self.send = send
        self.tick_seconds = tick_seconds
        self.started = False
        self.stopped = False

    def start(self) -> None:
        self.started = True
        self.send(KeyEvent("c", ctrl=True))

    def stop(self) -> None:
        self.stopped = True


class RunMainLoopTests(unittest.TestCase):
    def test_draws_only_when_dirty_and_stops_on_quit(self) -> None:
        controller = EventController()
        state = AppState(width=30, height=10)
        frames: list[list[str]] = []
        ticks = {"count": 0}

        def on_tick(ctrl, st, event) -> None:
            if isinstance(event, TickEvent):
                ticks["count"] += 1
                if ticks["count"] == 2:
                    st.dirty = True
                if ticks["count"] == 3:
                    st.should_quit = True

        controller.add_listener("probe", on_tick)
        for _ in range(3):
            controller.send(TickEvent())

        run_main_loop(controller, state, PLAIN_THEME, write=frames.append)

        self.assertEqual(len(frames), 2)
        self.assertEqual(len(frames[0]), 10)
        self.assertFalse(state.dirty)

    def test_closed_channel_propagates(self) -> None:
        controller = EventController()
        controller.close()
        with self.assertRaises(ChannelClosedError):
            run_main_loop(controller, AppState(), PLAIN_THEME, write=lambda rows: None)


class RunViewerTests(unittest.TestCase):
    def setUp(self) -> None:
        _FakeTerminal.instances.clear()

    def _run(self, command: str | None) -> AppState:
        captured: dict[str, AppState] = {}

        def fake_loop(controller, state, theme, write) -> None:
            captured["state"] = state
            real_main_loop(controller, state, theme, write=lambda rows: None)

        with mock.patch("mantui.runtime.app.TerminalController", _FakeTerminal), mock.patch(
            "mantui.runtime.app.InputProducer", _FakeProducer
        ), mock.patch("mantui.runtime.app.run_main_loop", side_effect=fake_loop), mock.patch(
            "mantui.runtime.app.terminal_size", return_value=(80, 24)
        ), mock.patch("mantui.runtime.app.Navigator") as navigator_cls:
            from mantui.pages import Navigator

            navigator_cls.side_effect = lambda controller, loader: Navigator(
                controller, loader, fetch_manual=lambda name, width: f"manual for {name}"
            )
            run_viewer(command, ViewerConfig(), PLAIN_THEME, stdin_fd=0, stdout_fd=1)
        return captured["state"]

    def test_without_command_starts_on_home_and_restores_terminal(self) -> None:
        state = self._run(None)

        self.assertIsInstance(state.page, HomePageState)
        self.assertTrue(state.should_quit)
        terminal = _FakeTerminal.instances[0]
        self.assertTrue(terminal.entered)
        self.assertTrue(terminal.exited)

    def test_command_opens_reader_directly(self) -> None:
        state = self._run("ls")

        self.assertIsInstance(state.page, ReaderPageState)
        self.assertEqual(state.page.view.buffer.plain_lines, ("manual for ls",))

    def test_initial_route(self) -> None:
        self.assertEqual(initial_route(None).kind, PageKind.HOME)
        route = initial_route("grep")
        self.assertEqual((route.kind, route.command), (PageKind.READER, "grep"))


if __name__ == "__main__":
    unittest.main()
