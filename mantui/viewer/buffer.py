"""Immutable styled-line buffer for one opened manual page."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..ansi import strip_ansi
from .overstrike import OverstrikeDecodeError, decode_overstrike

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT_MESSAGE = "Could not load manual page for '{command}'."
DECODE_FAILURE_MESSAGE = "Could not convert manual page for '{command}'."


def _split_lines(text: str) -> list[str]:
    lines = text.replace("\r", "").split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


@dataclass(frozen=True)
class TextBuffer:
    """Decoded document: styled (ANSI) lines plus their plain-text twins."""

    styled_lines: tuple[str, ...]
    plain_lines: tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> TextBuffer:
        """Build a buffer from already-styled ANSI ``text``."""
        styled = tuple(_split_lines(text))
        return cls(styled_lines=styled, plain_lines=tuple(strip_ansi(line) for line in styled))

    @classmethod
    def from_raw(cls, raw: str, command: str = "") -> TextBuffer:
        """Decode overstrike ``raw`` text, substituting a placeholder on failure."""
        if not raw.strip():
            return cls.from_text(EMPTY_DOCUMENT_MESSAGE.format(command=command))
        try:
            decoded = decode_overstrike(raw)
        except OverstrikeDecodeError as exc:
            logger.warning("could not decode manual page for %r: %s", command, exc)
            return cls.from_text(DECODE_FAILURE_MESSAGE.format(command=command))
        return cls.from_text(decoded)

    @property
    def height(self) -> int:
        return len(self.styled_lines)
