"""Case-insensitive in-document search with a clamped match cursor."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

SEARCH_SCROLL_PADDING = 2


def find_matches(lines: Sequence[str], query: str) -> list[tuple[int, int]]:
    """Return ``(row, column)`` of every non-overlapping match, row-major order."""
    if not query:
        return []
    needle = query.lower()
    positions: list[tuple[int, int]] = []
    for row, line in enumerate(lines):
        haystack = line.lower()
        col = haystack.find(needle)
        while col >= 0:
            positions.append((row, col))
            col = haystack.find(needle, col + len(needle))
    return positions


@dataclass
class SearchIndex:
    """Match list for the current query and the selected-match cursor.

    The cursor is ``None`` until a match is selected; afterwards it always lies
    in ``[0, len(matches))``. Stepping past either end clamps, never wraps.
    """

    query: str = ""
    matches: list[tuple[int, int]] = field(default_factory=list)
    selected_index: int | None = None

    def update(self, lines: Sequence[str], query: str) -> None:
        """Recompute all matches for ``query`` and reset the cursor."""
        self.query = query
        self.matches = find_matches(lines, query)
        self.selected_index = None

    def clear(self) -> None:
        self.query = ""
        self.matches = []
        self.selected_index = None

    def selected(self) -> tuple[int, int] | None:
        if self.selected_index is None or not self.matches:
            return None
        return self.matches[self.selected_index]

    def select_next(self) -> tuple[int, int] | None:
        if not self.matches:
            return None
        if self.selected_index is None:
            self.selected_index = 0
        else:
            self.selected_index = min(self.selected_index + 1, len(self.matches) - 1)
        return self.selected()

    def select_previous(self) -> tuple[int, int] | None:
        if not self.matches:
            return None
        if self.selected_index is None:
            self.selected_index = 0
        else:
            self.selected_index = max(self.selected_index - 1, 0)
        return self.selected()
