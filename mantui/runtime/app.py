"""Interactive viewer bootstrap and main loop.

The main thread owns ``AppState``: it draws when the state is dirty, then
blocks on the controller for the next event. The input producer thread and
the section-loader threads only ever talk to it through the channel.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from ..config import ViewerConfig
from ..events import EventController, InputProducer
from ..loader import SectionLoader
from ..manual import list_section
from ..pages import Navigator, Route, install_global_listeners, terminal_size
from ..render import render_frame, write_frame
from ..state import AppState
from ..terminal import TerminalController
from ..ui_theme import UITheme

logger = logging.getLogger(__name__)


def run_main_loop(
    controller: EventController,
    state: AppState,
    theme: UITheme,
    write: Callable[[list[str]], None] = write_frame,
) -> None:
    """Draw, then dispatch one event, until a listener requests quit.

    ``ChannelClosedError`` propagates when the input side has died.
    """
    while not state.should_quit:
        if state.dirty:
            write(render_frame(state, theme, state.width, state.height))
            state.dirty = False
        controller.recv_and_dispatch(state)


def initial_route(command: str | None) -> Route:
    return Route.reader(command) if command else Route.home()


def run_viewer(
    command: str | None,
    config: ViewerConfig,
    theme: UITheme,
    *,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Run the interactive viewer until the user quits.

    Raises ``termios.error``/``OSError`` when the terminal cannot be put into
    raw mode; the terminal is restored before any exception leaves.
    """
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    terminal = TerminalController(stdin_fd, stdout_fd)

    controller = EventController()
    state = AppState()
    state.width, state.height = terminal_size()

    loader = SectionLoader(
        controller.send,
        list_section,
        state.debounce,
        config.debounce_seconds,
    )
    navigator = Navigator(controller, loader)
    install_global_listeners(controller, terminal_size)
    producer = InputProducer(
        controller.send,
        stdin_fd,
        config.tick_seconds,
        on_error=controller.close,
    )

    with terminal.raw_mode():
        navigator.navigate_to(state, initial_route(command))
        producer.start()
        try:
            run_main_loop(
                controller,
                state,
                theme,
                write=lambda rows: write_frame(rows, stdout_fd),
            )
        finally:
            producer.stop()
    logger.info("viewer closed")
