"""Mutable application state shared by listeners and the render pass.

Only the main loop touches these objects: listeners mutate them inside
``EventController.dispatch`` and the renderer reads them between events.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Union

from .loader import DebounceToken
from .viewer import ReaderView

DEFAULT_SECTION = 1
STATUS_MESSAGE_SECONDS = 1.2


@dataclass
class HomePageState:
    """Intro screen; carries no data of its own."""


@dataclass
class ListPageState:
    query: str = ""
    editing: bool = False
    selected: int | None = None
    list_start: int = 0


@dataclass
class ReaderPageState:
    command: str
    view: ReaderView
    editing: bool = False


PageState = Union[HomePageState, ListPageState, ReaderPageState]


@dataclass
class AppState:
    page: PageState = field(default_factory=HomePageState)
    selected_section: int = DEFAULT_SECTION
    # List search and selection remembered while a manual page is open.
    search: str = ""
    selected_command: int | None = None
    # ``None`` while the listing for ``selected_section`` is loading.
    commands: list[str] | None = None
    debounce: DebounceToken = field(default_factory=DebounceToken)
    width: int = 80
    height: int = 24
    should_quit: bool = False
    dirty: bool = True
    spinner_frame: int = 0
    status_message: str = ""
    status_message_until: float = 0.0


def set_status_message(state: AppState, message: str) -> None:
    """Show a short-lived message in the reader search bar."""
    state.status_message = message
    state.status_message_until = time.monotonic() + STATUS_MESSAGE_SECONDS
    state.dirty = True


def clear_status_message(state: AppState) -> None:
    state.status_message = ""
    state.status_message_until = 0.0
