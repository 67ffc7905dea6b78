"""Command list page: browse, filter and pick a manual page by section."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..events import (
    MOUSE_DOWN,
    MOUSE_SCROLL_DOWN,
    MOUSE_SCROLL_UP,
    Event,
    EventController,
    KeyEvent,
    Listener,
    MouseEvent,
)
from ..state import AppState, ListPageState
from .routes import Route

if TYPE_CHECKING:
    from .navigation import Navigator

LIST_TOP_ROW = 1
SECTION_KEYS = "123456789"


def list_viewport_height(height: int) -> int:
    """Rows available for entries: borders and the footer line take three."""
    return max(1, height - 3)


def filtered_commands(commands: Sequence[str], query: str) -> list[str]:
    """Case-insensitive substring filter preserving listing order."""
    if not query:
        return list(commands)
    needle = query.lower()
    return [name for name in commands if needle in name.lower()]


def visible_items(state: AppState, page: ListPageState) -> list[str]:
    if state.commands is None:
        return []
    return filtered_commands(state.commands, page.query)


def _select(state: AppState, page: ListPageState, index: int) -> None:
    items = visible_items(state, page)
    if not items:
        page.selected = None
        page.list_start = 0
        return
    page.selected = max(0, min(index, len(items) - 1))
    viewport = list_viewport_height(state.height)
    if page.selected < page.list_start:
        page.list_start = page.selected
    elif page.selected >= page.list_start + viewport:
        page.list_start = page.selected - viewport + 1
    page.list_start = max(0, min(page.list_start, max(0, len(items) - viewport)))


def reset_selection(state: AppState, page: ListPageState) -> None:
    """Point the selection at the first visible entry; nothing while editing."""
    page.list_start = 0
    if page.editing:
        page.selected = None
        return
    _select(state, page, 0)


def _move(state: AppState, page: ListPageState, delta: int) -> None:
    if page.selected is None:
        reset_selection(state, page)
        return
    _select(state, page, page.selected + delta)


def _clear_search(state: AppState, page: ListPageState) -> None:
    filtered = bool(page.query)
    page.query = ""
    page.editing = False
    if filtered or page.selected is None:
        reset_selection(state, page)


def _open_selected(navigator: Navigator, state: AppState, page: ListPageState) -> None:
    items = visible_items(state, page)
    if page.selected is None or page.selected >= len(items):
        return
    state.search = page.query
    state.selected_command = page.selected
    navigator.navigate_to(state, Route.reader(items[page.selected]))


def _switch_section(navigator: Navigator, state: AppState, page: ListPageState, section: int) -> None:
    navigator.change_section(state, section)
    page.query = ""
    page.editing = False
    page.selected = None
    page.list_start = 0


def _handle_editing_key(state: AppState, page: ListPageState, event: KeyEvent) -> bool:
    if event.code == "ESC":
        _clear_search(state, page)
    elif event.code == "ENTER":
        page.editing = False
        reset_selection(state, page)
    elif event.code == "BACKSPACE":
        page.query = page.query[:-1]
        reset_selection(state, page)
    elif event.is_char():
        page.query += event.code
        reset_selection(state, page)
    else:
        return False
    return True


def _handle_key(navigator: Navigator, state: AppState, page: ListPageState, event: KeyEvent) -> bool:
    half_page = max(1, list_viewport_height(state.height) // 2)
    if event.is_char("j") or event.code == "DOWN":
        _move(state, page, 1)
    elif event.is_char("k") or event.code == "UP":
        _move(state, page, -1)
    elif event.is_ctrl("d") or event.code == "PAGE_DOWN":
        _move(state, page, half_page)
    elif event.is_ctrl("u") or event.code == "PAGE_UP":
        _move(state, page, -half_page)
    elif event.is_char("g") or event.code == "HOME":
        _select(state, page, 0)
    elif event.is_char("G") or event.code == "END":
        _select(state, page, len(visible_items(state, page)) - 1)
    elif event.is_char("/"):
        page.editing = True
        page.selected = None
    elif event.code == "ESC":
        _clear_search(state, page)
    elif event.is_char() and event.code in SECTION_KEYS:
        _switch_section(navigator, state, page, int(event.code))
    elif event.code == "ENTER":
        _open_selected(navigator, state, page)
    else:
        return False
    return True


def _handle_mouse(state: AppState, page: ListPageState, event: MouseEvent) -> bool:
    if event.kind == MOUSE_SCROLL_DOWN:
        _move(state, page, 1)
    elif event.kind == MOUSE_SCROLL_UP:
        _move(state, page, -1)
    elif event.kind == MOUSE_DOWN:
        offset = event.row - LIST_TOP_ROW
        if not 0 <= offset < list_viewport_height(state.height):
            return False
        index = page.list_start + offset
        if index >= len(visible_items(state, page)):
            return False
        page.editing = False
        _select(state, page, index)
    else:
        return False
    return True


def enter(navigator: Navigator, state: AppState, route: Route) -> ListPageState:
    """Restore the remembered search and selection, loading if needed."""
    page = ListPageState(query=state.search, selected=state.selected_command)
    navigator.ensure_loaded(state)
    if state.commands is not None:
        if page.selected is None:
            reset_selection(state, page)
        else:
            _select(state, page, page.selected)
    return page


def listeners(navigator: Navigator) -> dict[str, Listener]:
    def on_key(controller: EventController, state: AppState, event: Event) -> None:
        page = state.page
        if not isinstance(page, ListPageState) or not isinstance(event, KeyEvent):
            return
        if page.editing:
            handled = _handle_editing_key(state, page, event)
        else:
            handled = _handle_key(navigator, state, page, event)
        if handled:
            state.dirty = True

    def on_mouse(controller: EventController, state: AppState, event: Event) -> None:
        page = state.page
        if not isinstance(page, ListPageState) or not isinstance(event, MouseEvent):
            return
        if _handle_mouse(state, page, event):
            state.dirty = True

    return {"list.keys": on_key, "list.mouse": on_mouse}
