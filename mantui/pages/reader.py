"""Manual reader page: scrolling, in-page search and mouse selection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..events import (
    MOUSE_DOWN,
    MOUSE_DRAG,
    MOUSE_SCROLL_DOWN,
    MOUSE_SCROLL_UP,
    MOUSE_UP,
    Event,
    EventController,
    KeyEvent,
    Listener,
    MouseEvent,
)
from ..state import AppState, ReaderPageState, set_status_message
from ..viewer import ReaderLayout, ReaderView, ScreenPosition, TextBuffer
from .routes import Route

if TYPE_CHECKING:
    from .navigation import Navigator

logger = logging.getLogger(__name__)

WHEEL_SCROLL_LINES = 1


def _handle_editing_key(page: ReaderPageState, event: KeyEvent) -> bool:
    view = page.view
    if event.code in ("ESC", "ENTER"):
        page.editing = False
    elif event.code == "BACKSPACE":
        view.set_query(view.search.query[:-1])
    elif event.is_char():
        view.set_query(view.search.query + event.code)
    else:
        return False
    return True


def _handle_escape(navigator: Navigator, state: AppState, page: ReaderPageState) -> None:
    view = page.view
    if view.clear_selection():
        return
    if not view.search.query:
        navigator.navigate_to(state, Route.list())
        return
    view.clear_search()


def _handle_key(navigator: Navigator, state: AppState, page: ReaderPageState, event: KeyEvent) -> bool:
    view = page.view
    if event.is_char("j") or event.code == "DOWN":
        view.scroll_by(1)
    elif event.is_char("k") or event.code == "UP":
        view.scroll_by(-1)
    elif event.is_ctrl("d") or event.code == "PAGE_DOWN":
        view.half_page_down()
    elif event.is_ctrl("u") or event.code == "PAGE_UP":
        view.half_page_up()
    elif event.is_char("g") or event.code == "HOME":
        view.scroll_to_top()
    elif event.is_char("G") or event.code == "END":
        view.scroll_to_bottom()
    elif event.is_char("/"):
        page.editing = True
        view.clear_selection()
    elif event.is_char("n"):
        view.next_match()
    elif event.is_char("N"):
        view.previous_match()
    elif event.code == "ESC":
        _handle_escape(navigator, state, page)
    else:
        return False
    return True


def _handle_mouse(navigator: Navigator, state: AppState, page: ReaderPageState, event: MouseEvent) -> bool:
    view = page.view
    layout = ReaderLayout(state.width, state.height)
    pos = ScreenPosition(event.row, event.col)

    if event.kind in (MOUSE_SCROLL_UP, MOUSE_SCROLL_DOWN):
        if not layout.contains(pos):
            return False
        delta = WHEEL_SCROLL_LINES if event.kind == MOUSE_SCROLL_DOWN else -WHEEL_SCROLL_LINES
        view.scroll_by(delta)
        return True

    if event.kind == MOUSE_DOWN:
        if pos.row == layout.search_bar_row:
            view.clear_selection()
            page.editing = True
            return True
        if not layout.contains(pos):
            return False
        page.editing = False
        view.begin_selection(pos, layout)
        return True

    if event.kind == MOUSE_DRAG:
        return view.extend_selection(pos, layout)

    if event.kind == MOUSE_UP:
        if not view.dragging:
            return False
        text = view.finish_selection()
        if not text:
            return True
        if navigator.copy_text(text):
            set_status_message(state, f"copied {len(text)} chars")
        else:
            logger.info("selection of %d chars not copied: no clipboard", len(text))
            set_status_message(state, "no clipboard tool found")
        return True

    return False


def enter(navigator: Navigator, state: AppState, route: Route) -> ReaderPageState:
    """Fetch, decode and wrap ``route.command`` at the reader's content width."""
    command = route.command or ""
    layout = ReaderLayout(state.width, state.height)
    raw = navigator.fetch_manual(command, layout.viewport_width)
    buffer = TextBuffer.from_raw(raw, command)
    view = ReaderView(buffer, viewport_height=layout.viewport_height)
    return ReaderPageState(command=command, view=view)


def listeners(navigator: Navigator) -> dict[str, Listener]:
    def on_key(controller: EventController, state: AppState, event: Event) -> None:
        page = state.page
        if not isinstance(page, ReaderPageState) or not isinstance(event, KeyEvent):
            return
        if page.editing:
            handled = _handle_editing_key(page, event)
        else:
            handled = _handle_key(navigator, state, page, event)
        if handled:
            state.dirty = True

    def on_mouse(controller: EventController, state: AppState, event: Event) -> None:
        page = state.page
        if not isinstance(page, ReaderPageState) or not isinstance(event, MouseEvent):
            return
        if _handle_mouse(navigator, state, page, event):
            state.dirty = True

    return {"reader.keys": on_key, "reader.mouse": on_mouse}
