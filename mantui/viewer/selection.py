"""Screen/buffer coordinate mapping and mouse text selection.

Screen space is the visible terminal grid (0-based, includes the reader's
border and padding, independent of scrolling). Buffer space is the absolute
``(row, column)`` inside the decoded document and depends on the scroll
offset. Selections are stored in buffer space so they stay anchored to the
text while the view scrolls underneath an ongoing drag.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple


class ScreenPosition(NamedTuple):
    row: int
    col: int


class BufferPosition(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True)
class ReaderLayout:
    """Geometry of the reader page for a ``width`` x ``height`` terminal.

    Row 0 is the top border, the last row is the search bar and the row
    above it the bottom border. Column 0 is the left border followed by one
    blank padding column; the right border doubles as the scrollbar.
    """

    width: int
    height: int
    top_padding: int = 1
    left_padding: int = 2

    @property
    def viewport_height(self) -> int:
        return max(1, self.height - 3)

    @property
    def viewport_width(self) -> int:
        return max(1, self.width - 4)

    @property
    def search_bar_row(self) -> int:
        return max(0, self.height - 1)

    def contains(self, pos: ScreenPosition) -> bool:
        """Return whether ``pos`` falls inside the scrollable content area."""
        return (
            self.top_padding <= pos.row < self.top_padding + self.viewport_height
            and self.left_padding <= pos.col < self.left_padding + self.viewport_width
        )


def screen_to_buffer(
    pos: ScreenPosition,
    scroll_offset: int,
    top_padding: int,
    left_padding: int,
) -> BufferPosition:
    """Map a terminal cell to document coordinates (saturating at 0)."""
    return BufferPosition(
        max(0, pos.row + scroll_offset - top_padding),
        max(0, pos.col - left_padding),
    )


def buffer_to_screen(
    pos: BufferPosition,
    scroll_offset: int,
    top_padding: int,
    left_padding: int,
) -> ScreenPosition:
    """Inverse of ``screen_to_buffer``; rows above the viewport go negative."""
    return ScreenPosition(
        pos.row - scroll_offset + top_padding,
        pos.col + left_padding,
    )


def normalize(
    first: BufferPosition,
    second: BufferPosition,
) -> tuple[BufferPosition, BufferPosition]:
    """Order two positions row-first, then column."""
    if (second.row, second.col) < (first.row, first.col):
        return second, first
    return first, second


@dataclass
class SelectionRange:
    """Drag selection: ``anchor`` is where the press happened, ``focus`` follows the drag."""

    anchor: BufferPosition
    focus: BufferPosition

    @classmethod
    def start(cls, pos: BufferPosition) -> SelectionRange:
        return cls(anchor=pos, focus=pos)

    def extend(self, pos: BufferPosition) -> None:
        self.focus = pos

    def normalized(self) -> tuple[BufferPosition, BufferPosition]:
        return normalize(self.anchor, self.focus)

    def is_single_cell(self) -> bool:
        return self.anchor == self.focus


def visible_selection_spans(
    selection: SelectionRange,
    scroll_offset: int,
    layout: ReaderLayout,
) -> list[tuple[int, int, int]]:
    """Return ``(screen_row, start_col, end_col)`` highlight spans for visible rows.

    ``end_col`` is exclusive. Only rows inside the current viewport are
    returned; rows fully inside the selection extend to the right edge.
    """
    start, end = selection.normalized()
    first_row = max(start.row, scroll_offset)
    last_row = min(end.row, scroll_offset + layout.viewport_height - 1)
    spans: list[tuple[int, int, int]] = []
    for row in range(first_row, last_row + 1):
        first_col = start.col if row == start.row else 0
        last_col = end.col if row == end.row else layout.viewport_width - 1
        last_col = min(last_col, layout.viewport_width - 1)
        if last_col < first_col:
            continue
        screen = buffer_to_screen(
            BufferPosition(row, first_col),
            scroll_offset,
            layout.top_padding,
            layout.left_padding,
        )
        spans.append((screen.row, screen.col, screen.col + last_col - first_col + 1))
    return spans


def extract_selected_text(lines: Sequence[str], selection: SelectionRange) -> str:
    """Return the text covered by ``selection``; the end column is inclusive."""
    if not lines:
        return ""
    start, end = selection.normalized()
    last_line = len(lines) - 1
    if start.row > last_line:
        return ""
    end_row = min(end.row, last_line)
    end_col = end.col if end.row <= last_line else len(lines[last_line])

    parts: list[str] = []
    for row in range(start.row, end_row + 1):
        line = lines[row]
        if row == start.row and row == end_row:
            parts.append(line[start.col : end_col + 1])
        elif row == start.row:
            parts.append(line[start.col :])
        elif row == end_row:
            parts.append(line[: end_col + 1])
        else:
            parts.append(line)
    return "\n".join(parts)
