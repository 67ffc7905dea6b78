"""Overstrike (backspace) formatting decoder.

``man`` output piped through a non-terminal keeps the typewriter encoding of
emphasis: ``c BS c`` prints a bold ``c`` and ``_ BS c`` an underlined ``c``.
This module turns that stream into ANSI-styled text where each run of equally
styled characters is opened once and reset once.
"""

from __future__ import annotations

from itertools import groupby

from pygments.console import codes

BACKSPACE = "\b"

PLAIN = 0
BOLD = 1
UNDERLINE = 2

STYLE_SGR: dict[int, str] = {
    BOLD: codes["bold"],
    UNDERLINE: codes["underline"],
    BOLD | UNDERLINE: codes["bold"] + codes["underline"],
}
RESET_SGR = codes["reset"]


class OverstrikeDecodeError(ValueError):
    """Raised for a backspace that has no visible character to combine with."""


def decode_cells(raw: str) -> list[tuple[str, int]]:
    """Collapse overstrike sequences into ``(character, style)`` cells.

    Newlines are kept as plain cells. Repeated overstrikes of the same
    character (``c BS c BS c``) still produce a single cell.
    """
    cells: list[tuple[str, int]] = []
    i = 0
    n = len(raw)
    while i < n:
        ch = raw[i]
        if ch == BACKSPACE:
            raise OverstrikeDecodeError(f"backspace without preceding character at offset {i}")
        i += 1
        if ch == "\n":
            cells.append((ch, PLAIN))
            continue

        visible = ch
        style = PLAIN
        while i < n and raw[i] == BACKSPACE:
            if i + 1 >= n or raw[i + 1] in {"\n", BACKSPACE}:
                raise OverstrikeDecodeError(f"backspace without following character at offset {i}")
            struck = raw[i + 1]
            if struck == visible:
                style |= BOLD
            elif visible == "_":
                style |= UNDERLINE
                visible = struck
            elif struck == "_":
                style |= UNDERLINE
            else:
                # Overprinted glyphs such as "+ BS o" bullets keep the last one.
                visible = struck
            i += 2
        cells.append((visible, style))
    return cells


def _encode_run(text: str, style: int) -> str:
    if style == PLAIN:
        return text
    return f"{STYLE_SGR[style]}{text}{RESET_SGR}"


def decode_overstrike(raw: str) -> str:
    """Return ANSI-styled text for overstrike-encoded ``raw`` text.

    Backticks are rendered as apostrophes, matching how ``man`` renders
    quotes on terminals.
    """
    out: list[str] = []
    for style, group in groupby(decode_cells(raw), key=lambda cell: cell[1]):
        # Newline cells are plain, so styled runs never span lines.
        text = "".join(ch for ch, _style in group).replace("`", "'")
        out.append(_encode_run(text, style))
    return "".join(out)
