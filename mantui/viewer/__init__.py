"""Text viewer: overstrike decoding, scrolling, search, and selection."""

from .buffer import DECODE_FAILURE_MESSAGE, EMPTY_DOCUMENT_MESSAGE, TextBuffer
from .overstrike import OverstrikeDecodeError, decode_overstrike
from .search import SEARCH_SCROLL_PADDING, SearchIndex, find_matches
from .selection import (
    BufferPosition,
    ReaderLayout,
    ScreenPosition,
    SelectionRange,
    buffer_to_screen,
    extract_selected_text,
    normalize,
    screen_to_buffer,
    visible_selection_spans,
)
from .view import ReaderView

__all__ = [
    "BufferPosition",
    "DECODE_FAILURE_MESSAGE",
    "EMPTY_DOCUMENT_MESSAGE",
    "OverstrikeDecodeError",
    "ReaderLayout",
    "ReaderView",
    "SEARCH_SCROLL_PADDING",
    "ScreenPosition",
    "SearchIndex",
    "SelectionRange",
    "TextBuffer",
    "buffer_to_screen",
    "decode_overstrike",
    "extract_selected_text",
    "find_matches",
    "normalize",
    "screen_to_buffer",
    "visible_selection_spans",
]
