"""ANSI-aware text measurement and line shaping utilities.

Provides clipping, plain-text extraction, and column-range highlighting that
preserve escape sequences. These helpers keep rendering aligned when manual
pages carry bold/underline codes recovered from overstrike formatting.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def strip_ansi(text: str) -> str:
    """Return ``text`` with every escape sequence removed."""
    return ANSI_ESCAPE_RE.sub("", text)


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def plain_display_width(text: str) -> int:
    """Return display width of ``text`` after stripping escape sequences."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if ch == "\t":
            if col + w > max_cols:
                break
            out.append(" " * w)
            col += w
            i += 1
            continue
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Right-pad a styled line with spaces so it fills ``width`` columns."""
    missing = width - plain_display_width(text)
    if missing <= 0:
        return text
    return text + " " * missing


def _is_reset_sgr(seq: str) -> bool:
    params = seq[2:-1]
    if not params:
        return True
    return any(part in {"0", "00"} for part in params.split(";"))


def restyle_after_resets(text: str, base_sgr: str) -> str:
    """Re-apply ``base_sgr`` after every SGR reset so the base style persists."""
    if not base_sgr or "\x1b" not in text:
        return text
    out: list[str] = []
    idx = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        out.append(text[idx : match.end()])
        seq = match.group(0)
        if seq.endswith("m") and _is_reset_sgr(seq):
            out.append(base_sgr)
        idx = match.end()
    out.append(text[idx:])
    return "".join(out)


def _highlight_segment(text: str, sgr_params: str, restore: str) -> str:
    if not text:
        return text
    out: list[str] = [f"\033[{sgr_params}m"]
    idx = 0
    while idx < len(text):
        if text[idx] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, idx)
            if match is not None:
                seq = match.group(0)
                if seq.endswith("m"):
                    params = seq[2:-1]
                    if params:
                        out.append(f"\033[{params};{sgr_params}m")
                    else:
                        out.append(f"\033[{sgr_params}m")
                else:
                    out.append(seq)
                idx = match.end()
                continue
        out.append(text[idx])
        idx += 1
    out.append(restore)
    return "".join(out)


def highlight_ansi_column_range(
    text: str,
    start_col: int,
    end_col: int,
    sgr_params: str,
    restore: str = "\033[0m",
) -> str:
    """Highlight visible characters ``[start_col, end_col)`` of a styled line.

    Columns count visible characters only; escape sequences inside the range
    are merged with ``sgr_params`` so the highlight survives embedded resets.
    Columns past the end of the line are padded with highlighted spaces.
    """
    if end_col <= start_col:
        return text

    visible_start: list[int] = []
    visible_end: list[int] = []

    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                i = match.end()
                continue
        visible_start.append(i)
        i += 1
        visible_end.append(i)

    visible_count = len(visible_start)
    start_idx = max(0, start_col)
    if start_idx >= visible_count:
        gap = " " * (start_idx - visible_count)
        return text + gap + _highlight_segment(" " * (end_col - start_idx), sgr_params, restore)

    end_idx = min(visible_count, end_col)
    overflow = max(0, end_col - visible_count)
    raw_start = visible_start[start_idx]
    raw_end = visible_end[end_idx - 1]
    return (
        text[:raw_start]
        + _highlight_segment(text[raw_start:raw_end] + " " * overflow, sgr_params, restore)
        + text[raw_end:]
    )
