"""Scrollable document view with search and mouse selection.

``ReaderView`` is the widget state behind the reader page. It knows nothing
about pages or the application state: listeners translate events into calls
on this object and read back what changed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .buffer import TextBuffer
from .search import SEARCH_SCROLL_PADDING, SearchIndex
from .selection import (
    ReaderLayout,
    ScreenPosition,
    SelectionRange,
    extract_selected_text,
    screen_to_buffer,
)


@dataclass
class ReaderView:
    """Line-granular scroll position, search matches, and the active selection."""

    buffer: TextBuffer
    viewport_height: int = 1
    scroll_offset: int = 0
    search: SearchIndex = field(default_factory=SearchIndex)
    selection: SelectionRange | None = None
    dragging: bool = False

    @property
    def max_scroll(self) -> int:
        return max(0, self.buffer.height - self.viewport_height)

    def scroll_to(self, offset: int) -> bool:
        """Move to ``offset`` clamped to ``[0, max_scroll]``; return whether it moved."""
        previous = self.scroll_offset
        self.scroll_offset = max(0, min(offset, self.max_scroll))
        return self.scroll_offset != previous

    def scroll_by(self, delta: int) -> bool:
        return self.scroll_to(self.scroll_offset + delta)

    def scroll_to_top(self) -> bool:
        return self.scroll_to(0)

    def scroll_to_bottom(self) -> bool:
        return self.scroll_to(self.max_scroll)

    def half_page_down(self) -> bool:
        return self.scroll_by(max(1, self.viewport_height // 2))

    def half_page_up(self) -> bool:
        return self.scroll_by(-max(1, self.viewport_height // 2))

    def set_viewport_height(self, height: int) -> None:
        self.viewport_height = max(1, height)
        self.scroll_to(self.scroll_offset)

    def reveal_row(self, row: int, padding: int = SEARCH_SCROLL_PADDING) -> None:
        """Scroll the minimum needed to keep ``row`` inside the padded band."""
        padding = max(0, min(padding, (self.viewport_height - 1) // 2))
        band_top = self.scroll_offset + padding
        band_bottom = self.scroll_offset + self.viewport_height - 1 - padding
        if row > band_bottom:
            self.scroll_to(row - (self.viewport_height - 1 - padding))
        elif row < band_top:
            self.scroll_to(row - padding)

    def set_query(self, query: str) -> None:
        """Recompute matches for ``query`` and jump to the first one."""
        self.search.update(self.buffer.plain_lines, query)
        self.next_match()

    def clear_search(self) -> None:
        self.search.clear()

    def next_match(self) -> tuple[int, int] | None:
        match = self.search.select_next()
        if match is not None:
            self.reveal_row(match[0])
        return match

    def previous_match(self) -> tuple[int, int] | None:
        match = self.search.select_previous()
        if match is not None:
            self.reveal_row(match[0])
        return match

    def begin_selection(self, pos: ScreenPosition, layout: ReaderLayout) -> None:
        """Anchor a new selection at the buffer cell under ``pos``."""
        buffer_pos = screen_to_buffer(pos, self.scroll_offset, layout.top_padding, layout.left_padding)
        self.selection = SelectionRange.start(buffer_pos)
        self.dragging = True

    def extend_selection(self, pos: ScreenPosition, layout: ReaderLayout) -> bool:
        """Move the selection end to the cell under ``pos``."""
        if self.selection is None or not self.dragging:
            return False
        buffer_pos = screen_to_buffer(pos, self.scroll_offset, layout.top_padding, layout.left_padding)
        self.selection.extend(buffer_pos)
        return True

    def finish_selection(self) -> str | None:
        """End the drag; return the covered text when more than one cell is selected.

        A single-cell selection (a plain click) is discarded.
        """
        self.dragging = False
        if self.selection is None:
            return None
        if self.selection.is_single_cell():
            self.selection = None
            return None
        return extract_selected_text(self.buffer.plain_lines, self.selection)

    def clear_selection(self) -> bool:
        changed = self.selection is not None
        self.selection = None
        self.dragging = False
        return changed
