"""Rendering pass: compose the active page into a frame and write it.

``render_frame`` is pure and returns one string per terminal row so tests
can assert on frames without a terminal; ``write_frame`` pushes a composed
frame to the output descriptor in a single write.
"""

from __future__ import annotations

import os
import sys

from ..state import AppState, HomePageState, ListPageState, ReaderPageState
from ..ui_theme import UITheme
from .frames import render_home, render_list, render_reader


def render_frame(state: AppState, theme: UITheme, width: int, height: int) -> list[str]:
    """Build the rows for the currently active page."""
    width = max(1, width)
    height = max(1, height)
    page = state.page
    if isinstance(page, ListPageState):
        return render_list(state, page, theme, width, height)
    if isinstance(page, ReaderPageState):
        return render_reader(state, page, theme, width, height)
    if isinstance(page, HomePageState):
        return render_home(state, theme, width, height)
    raise TypeError(f"unknown page state: {page!r}")


def write_frame(rows: list[str], fd: int | None = None) -> None:
    """Home the cursor, clear, and write ``rows`` without a trailing newline."""
    out = "\033[H\033[J" + "\r\n".join(rows)
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, out.encode("utf-8", errors="replace"))


__all__ = ["render_frame", "write_frame"]
