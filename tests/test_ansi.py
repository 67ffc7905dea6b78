"""Tests for ANSI-aware clipping, padding and highlighting helpers."""

from __future__ import annotations

import unittest

from mantui.ansi import (
    clip_ansi_line,
    highlight_ansi_column_range,
    pad_ansi_line,
    plain_display_width,
    restyle_after_resets,
    strip_ansi,
)


class AnsiHelperTests(unittest.TestCase):
    def test_clip_preserves_escapes_and_counts_visible_columns(self) -> None:
        line = "\x1b[01mbold\x1b[39;49;00m text"
        clipped = clip_ansi_line(line, 6)
        self.assertEqual(strip_ansi(clipped), "bold t")
        self.assertTrue(clipped.startswith("\x1b[01m"))

    def test_clip_expands_tabs(self) -> None:
        self.assertEqual(clip_ansi_line("a\tb", 10), "a       b")

    def test_wide_characters_count_double(self) -> None:
        self.assertEqual(plain_display_width("日本"), 4)
        self.assertEqual(clip_ansi_line("日本語", 5), "日本")

    def test_pad_fills_to_width(self) -> None:
        self.assertEqual(pad_ansi_line("\x1b[1mab\x1b[0m", 4), "\x1b[1mab\x1b[0m  ")
        self.assertEqual(pad_ansi_line("abcdef", 4), "abcdef")

    def test_restyle_after_resets_reapplies_base(self) -> None:
        base = "\x1b[48;2;28;28;33m"
        styled = restyle_after_resets("a\x1b[0mb\x1b[39;49;00mc\x1b[1md", base)
        self.assertEqual(styled, f"a\x1b[0m{base}b\x1b[39;49;00m{base}c\x1b[1md")

    def test_highlight_range_wraps_visible_columns(self) -> None:
        self.assertEqual(
            highlight_ansi_column_range("abcdef", 1, 3, "7"),
            "a\x1b[7mbc\x1b[0mdef",
        )

    def test_highlight_merges_embedded_styles(self) -> None:
        highlighted = highlight_ansi_column_range("a\x1b[1mbc\x1b[0md", 0, 4, "7")
        self.assertEqual(strip_ansi(highlighted), "abcd")
        self.assertIn("\x1b[1;7m", highlighted)
        self.assertIn("\x1b[0;7m", highlighted)

    def test_highlight_past_line_end_pads_with_spaces(self) -> None:
        self.assertEqual(highlight_ansi_column_range("ab", 1, 4, "7"), "a\x1b[7mb  \x1b[0m")
        self.assertEqual(highlight_ansi_column_range("ab", 3, 5, "7"), "ab \x1b[7m  \x1b[0m")


if __name__ == "__main__":
    unittest.main()
