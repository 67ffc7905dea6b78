"""Per-page frame builders.

Each builder returns exactly ``height`` row strings, each ``width`` display
columns wide once escape sequences are ignored. Builders only read state.
"""

from __future__ import annotations

from ..ansi import clip_ansi_line, highlight_ansi_column_range, pad_ansi_line, restyle_after_resets
from ..pages import SPINNER_FRAMES
from ..pages.listing import list_viewport_height, visible_items
from ..state import AppState, ListPageState, ReaderPageState
from ..ui_theme import UITheme
from ..viewer import ReaderLayout, ReaderView, visible_selection_spans

BANNER: tuple[str, ...] = (
    "                       _         _ ",
    " _ __ ___   __ _ _ __ | |_ _   _(_)",
    "| '_ ` _ \\ / _` | '_ \\| __| | | | |",
    "| | | | | | (_| | | | | |_| |_| | |",
    "|_| |_| |_|\\__,_|_| |_|\\__|\\__,_|_|",
)
SUBTITLE = "Search and Browse Man Pages"
SEARCH_PROMPT = "Search (/): "
SCROLLBAR_THUMB = "█"


def _fill(theme: UITheme, text: str, width: int) -> str:
    """Clip/pad ``text`` to ``width`` and paint it on the base style."""
    body = pad_ansi_line(clip_ansi_line(text, width), width)
    return f"{theme.base}{restyle_after_resets(body, theme.base)}{theme.reset}"


def _centered(text: str, width: int) -> str:
    return " " * max(0, (width - len(text)) // 2) + text


def _top_border(theme: UITheme, style: str, title: str, width: int) -> str:
    if width < 2:
        return _fill(theme, "", width)
    label = f" {title} " if title else ""
    label = label[: max(0, width - 4)]
    rule = "─" * max(0, width - 3 - len(label))
    return _fill(theme, f"{style}╭─{theme.title}{label}{theme.reset}{theme.base}{style}{rule}╮", width)


def _bottom_border(theme: UITheme, style: str, width: int) -> str:
    if width < 2:
        return _fill(theme, "", width)
    return _fill(theme, f"{style}╰{'─' * (width - 2)}╯", width)


def _boxed_row(theme: UITheme, style: str, content: str, inner_width: int, right: str) -> str:
    body = pad_ansi_line(clip_ansi_line(content, inner_width), inner_width)
    body = restyle_after_resets(body, theme.base)
    return f"{theme.base}{style}│{theme.reset}{theme.base} {body} {right}{theme.reset}"


def render_home(state: AppState, theme: UITheme, width: int, height: int) -> list[str]:
    block = [*BANNER, "", SUBTITLE, "", "Press Enter to Continue"]
    top = max(0, (height - len(block)) // 2)
    rows: list[str] = []
    for row in range(height):
        idx = row - top
        if 0 <= idx < len(block):
            text = _centered(block[idx], width)
            if idx < len(BANNER):
                text = f"{theme.title}{text}{theme.reset}"
            elif block[idx] == SUBTITLE:
                text = f"{theme.dim}{text}{theme.reset}"
            rows.append(_fill(theme, text, width))
        else:
            rows.append(_fill(theme, "", width))
    return rows


def _list_footer(state: AppState, page: ListPageState, theme: UITheme, width: int) -> str:
    parts = [f"section {state.selected_section}"]
    if page.editing or page.query:
        cursor = f"{theme.cursor} {theme.reset}{theme.base}" if page.editing else ""
        style = theme.search_active if page.editing else theme.search_inactive
        parts.append(f"{style}/{page.query}{theme.reset}{theme.base}{cursor}")
    if state.commands is not None:
        parts.append(f"{theme.dim}{len(visible_items(state, page))} entries{theme.reset}{theme.base}")
    return _fill(theme, "  ".join(parts), width)


def render_list(state: AppState, page: ListPageState, theme: UITheme, width: int, height: int) -> list[str]:
    viewport = list_viewport_height(height)
    inner_width = max(0, width - 4)
    border = theme.border_inactive if page.editing else theme.border_active
    right = f"{border}│"
    rows = [_top_border(theme, border, f"Section {state.selected_section}", width)]

    items = visible_items(state, page)
    for offset in range(viewport):
        content = ""
        if state.commands is None:
            if offset == viewport // 2:
                spinner = SPINNER_FRAMES[state.spinner_frame % len(SPINNER_FRAMES)]
                content = _centered(f"{spinner} Loading section {state.selected_section}", inner_width)
        elif not items:
            if offset == viewport // 2:
                content = f"{theme.dim}{_centered('no entries', inner_width)}{theme.reset}"
        else:
            idx = page.list_start + offset
            if idx < len(items):
                if idx == page.selected:
                    style = theme.list_selected
                else:
                    style = theme.list_even if idx % 2 == 0 else theme.list_odd
                name = pad_ansi_line(clip_ansi_line(items[idx], inner_width), inner_width)
                content = f"{style}{name}{theme.reset}"
        rows.append(_boxed_row(theme, border, content, inner_width, right))

    rows.append(_bottom_border(theme, border, width))
    rows.append(_list_footer(state, page, theme, width))
    return rows[:height]


def _scrollbar_cells(view: ReaderView, viewport: int) -> list[bool]:
    """Return one flag per viewport row telling whether the thumb covers it."""
    total = view.buffer.height
    if view.max_scroll == 0 or total <= 0:
        return [False] * viewport
    thumb = max(1, viewport * viewport // total)
    top = round(view.scroll_offset * (viewport - thumb) / view.max_scroll)
    return [top <= row < top + thumb for row in range(viewport)]


def _highlight_line(
    line: str,
    buffer_row: int,
    view: ReaderView,
    theme: UITheme,
) -> str:
    query_len = len(view.search.query)
    if not query_len:
        return line
    selected = view.search.selected()
    for match in view.search.matches:
        if match[0] != buffer_row:
            continue
        params = theme.match_highlight if match == selected else theme.match_highlight_inactive
        line = highlight_ansi_column_range(
            line,
            match[1],
            match[1] + query_len,
            params,
            restore=theme.reset + theme.base,
        )
    return line


def _search_bar(page: ReaderPageState, theme: UITheme, width: int, status: str = "") -> str:
    search = page.view.search
    style = theme.search_active if page.editing else theme.search_inactive
    cursor = f"{theme.cursor} {theme.reset}{theme.base}" if page.editing else ""
    left = f"{style}{SEARCH_PROMPT}{search.query}{theme.reset}{theme.base}{cursor}"
    counter = ""
    if status and not page.editing:
        counter = status
    elif search.query:
        index = 0 if search.selected_index is None else search.selected_index + 1
        counter = f"{index}/{len(search.matches)}"
    used = len(SEARCH_PROMPT) + len(search.query) + (1 if page.editing else 0)
    gap = max(1, width - used - len(counter))
    return _fill(theme, f"{left}{' ' * gap}{theme.dim}{counter}{theme.reset}", width)


def render_reader(state: AppState, page: ReaderPageState, theme: UITheme, width: int, height: int) -> list[str]:
    layout = ReaderLayout(width, height)
    view = page.view
    viewport = layout.viewport_height
    inner_width = layout.viewport_width
    border = theme.border_inactive if page.editing else theme.border_active
    rows = [_top_border(theme, border, page.command, width)]

    spans: dict[int, tuple[int, int]] = {}
    if view.selection is not None:
        for screen_row, start_col, end_col in visible_selection_spans(view.selection, view.scroll_offset, layout):
            spans[screen_row] = (start_col - layout.left_padding, end_col - layout.left_padding)

    thumb = _scrollbar_cells(view, viewport)
    for offset in range(viewport):
        buffer_row = view.scroll_offset + offset
        content = ""
        if buffer_row < view.buffer.height:
            content = _highlight_line(view.buffer.styled_lines[buffer_row], buffer_row, view, theme)
        span = spans.get(offset + layout.top_padding)
        if span is not None:
            content = highlight_ansi_column_range(
                content,
                span[0],
                span[1],
                theme.selection_highlight,
                restore=theme.reset + theme.base,
            )
        right = f"{theme.scrollbar_thumb}{SCROLLBAR_THUMB}" if thumb[offset] else f"{border}│"
        rows.append(_boxed_row(theme, border, content, inner_width, right))

    rows.append(_bottom_border(theme, border, width))
    rows.append(_search_bar(page, theme, width, state.status_message))
    return rows[:height]
