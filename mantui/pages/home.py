"""Intro page shown when no command was given on the command line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..events import Event, EventController, KeyEvent, Listener
from ..state import AppState, HomePageState
from .routes import Route

if TYPE_CHECKING:
    from .navigation import Navigator


def enter(navigator: Navigator, state: AppState, route: Route) -> HomePageState:
    return HomePageState()


def listeners(navigator: Navigator) -> dict[str, Listener]:
    def on_key(controller: EventController, state: AppState, event: Event) -> None:
        if not isinstance(state.page, HomePageState) or not isinstance(event, KeyEvent):
            return
        if event.code == "ENTER":
            navigator.navigate_to(state, Route.list())
        elif event.is_char("q"):
            state.should_quit = True

    return {"home.keys": on_key}
