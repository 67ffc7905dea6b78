"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into ``KeyEvent`` and
``MouseEvent`` values. Handles ESC-sequence timing, control-key combos,
UTF-8 reassembly, and SGR (1006) mouse reports.
"""

from __future__ import annotations

import os
import select

from .events.types import (
    MOUSE_DOWN,
    MOUSE_DRAG,
    MOUSE_SCROLL_DOWN,
    MOUSE_SCROLL_UP,
    MOUSE_UP,
    Event,
    KeyEvent,
    MouseEvent,
)

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, KeyEvent] = {
    b"\x03": KeyEvent("c", ctrl=True),
    b"\x04": KeyEvent("d", ctrl=True),
    b"\x15": KeyEvent("u", ctrl=True),
    b"\x06": KeyEvent("f", ctrl=True),
    b"\x02": KeyEvent("b", ctrl=True),
    b"\t": KeyEvent("TAB"),
    b"\x08": KeyEvent("BACKSPACE"),
    b"\x7f": KeyEvent("BACKSPACE"),
    b"\r": KeyEvent("ENTER"),
    b"\n": KeyEvent("ENTER"),
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_printable(fd: int, first: bytes) -> KeyEvent:
    payload = bytearray(first)
    for _ in range(_utf8_length(first[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        payload += nxt
    return KeyEvent(payload.decode("utf-8", errors="replace"))


def _decode_sgr_mouse(fd: int) -> Event | None:
    # SGR mouse: ESC [ < btn ; col ; row (M/m)
    payload = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyEvent("ESC")
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return KeyEvent("ESC")
    try:
        btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
        btn = int(btn_s)
        col = int(col_s) - 1
        row = int(row_s) - 1
    except ValueError:
        return KeyEvent("ESC")
    button = btn & 0b11
    is_wheel = (btn & 0b0100_0000) != 0
    is_motion = (btn & 0b0010_0000) != 0
    if is_wheel:
        if button == 0:
            return MouseEvent(MOUSE_SCROLL_UP, col, row)
        if button == 1:
            return MouseEvent(MOUSE_SCROLL_DOWN, col, row)
        return None
    if button != 0:
        return None
    if is_motion:
        return MouseEvent(MOUSE_DRAG, col, row)
    return MouseEvent(MOUSE_DOWN if part == b"M" else MOUSE_UP, col, row)


def read_event(fd: int, timeout_ms: int | None = None) -> Event | None:
    """Read one input event from ``fd``.

    Returns ``None`` when ``timeout_ms`` elapses or for sequences that carry
    no event (unsupported buttons, focus reports). Raises ``EOFError`` once
    ``fd`` reaches end of input.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None

        ch = os.read(fd, 1)
        if not ch:
            raise EOFError("end of input")

    control = _CONTROL_KEYS.get(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        if ch[0] < 0x20:
            return KeyEvent(chr(ch[0] + 0x60), ctrl=True)
        return _decode_printable(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent("ESC")
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return KeyEvent("ESC")
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent("ESC")
    named = _CSI_FINAL_KEYS.get(seq)
    if named is not None:
        return KeyEvent(named)
    if seq == b"<":
        return _decode_sgr_mouse(fd)
    if seq in _CSI_TILDE_KEYS:
        terminator = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if terminator == b"~":
            return KeyEvent(_CSI_TILDE_KEYS[seq])
        return KeyEvent("ESC")
    return KeyEvent("ESC")
