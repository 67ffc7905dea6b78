"""Page state machine: Home, List and Reader.

``Navigator.navigate_to`` is the single reducer for page transitions. It
tears down every listener of the outgoing page before the incoming page's
state is built and its listeners are installed, so no event can ever reach
two pages' handlers or a handler of a page that is no longer active.
"""

from __future__ import annotations

import logging
import shutil
import time
from collections.abc import Callable, Sequence

from ..clipboard import copy_text_to_clipboard
from ..events import Event, EventController, KeyEvent, Listener, LoadedEvent, TickEvent
from ..loader import SectionLoader
from ..manual import fetch_manual
from ..state import AppState, ListPageState, ReaderPageState, clear_status_message
from ..viewer import ReaderLayout
from . import home, listing, reader
from .listing import reset_selection
from .routes import PageKind, Route

logger = logging.getLogger(__name__)

SPINNER_FRAMES: tuple[str, ...] = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

_PAGE_MODULES = {
    PageKind.HOME: home,
    PageKind.LIST: listing,
    PageKind.READER: reader,
}


class Navigator:
    """Own page transitions and the collaborators page listeners need."""

    def __init__(
        self,
        controller: EventController,
        loader: SectionLoader,
        *,
        fetch_manual: Callable[[str, int], str] = fetch_manual,
        copy_text: Callable[[str], bool] = copy_text_to_clipboard,
    ) -> None:
        self.controller = controller
        self.loader = loader
        self.fetch_manual = fetch_manual
        self.copy_text = copy_text
        self.current: Route | None = None
        self._installed: list[str] = []

    def navigate_to(self, state: AppState, route: Route) -> None:
        """Switch the active page to ``route``."""
        module = _PAGE_MODULES[route.kind]

        for listener_id in self._installed:
            self.controller.remove_listener(listener_id)
        self._installed = []

        logger.info("navigate %s -> %s", self.current, route)
        state.page = module.enter(self, state, route)
        self.current = route

        listeners = module.listeners(self)
        for listener_id, callback in listeners.items():
            self.controller.add_listener(listener_id, callback)
        self._installed = list(listeners)
        state.dirty = True

    def change_section(self, state: AppState, section: int) -> None:
        """Select ``section``, drop the shown items and restart the load."""
        state.selected_section = section
        state.commands = None
        state.search = ""
        state.selected_command = None
        state.spinner_frame = 0
        self.loader.request(section)
        state.dirty = True

    def ensure_loaded(self, state: AppState) -> None:
        """Request the listing for the current section when none is shown."""
        if state.commands is None:
            self.loader.request(state.selected_section)


def _quit_listener(controller: EventController, state: AppState, event: Event) -> None:
    if isinstance(event, KeyEvent) and event.is_ctrl("c"):
        state.should_quit = True


def _loaded_listener(controller: EventController, state: AppState, event: Event) -> None:
    if not isinstance(event, LoadedEvent):
        return
    if not state.debounce.is_current(event.token):
        logger.debug("discarding superseded listing for section %d", event.section)
        return
    if event.section != state.selected_section:
        logger.debug("discarding listing for stale section %d", event.section)
        return
    state.commands = list(event.items)
    page = state.page
    if isinstance(page, ListPageState):
        reset_selection(state, page)
    state.dirty = True


def make_tick_listener(
    get_size: Callable[[], tuple[int, int]],
    clock: Callable[[], float] = time.monotonic,
) -> Listener:
    """Build the tick listener: resize detection, spinner and status expiry."""

    def on_tick(controller: EventController, state: AppState, event: Event) -> None:
        if not isinstance(event, TickEvent):
            return
        width, height = get_size()
        if (width, height) != (state.width, state.height):
            state.width = width
            state.height = height
            page = state.page
            if isinstance(page, ReaderPageState):
                page.view.set_viewport_height(ReaderLayout(width, height).viewport_height)
            state.dirty = True
        if state.commands is None and isinstance(state.page, ListPageState):
            state.spinner_frame = (state.spinner_frame + 1) % len(SPINNER_FRAMES)
            state.dirty = True
        if state.status_message and clock() >= state.status_message_until:
            clear_status_message(state)
            state.dirty = True

    return on_tick


def terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size((80, 24))
    return max(1, size.columns), max(1, size.lines)


def install_global_listeners(
    controller: EventController,
    get_size: Callable[[], tuple[int, int]] = terminal_size,
) -> Sequence[str]:
    """Register the listeners that stay active on every page."""
    listeners: dict[str, Listener] = {
        "app.quit": _quit_listener,
        "app.loaded": _loaded_listener,
        "app.tick": make_tick_listener(get_size),
    }
    for listener_id, callback in listeners.items():
        controller.add_listener(listener_id, callback)
    return tuple(listeners)
