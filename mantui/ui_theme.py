"""UI theme definitions and selection helpers.

A theme is a frozen palette of ANSI SGR fragments built once at startup and
passed by reference into every render call. ``transparent`` is the variant
without background fill for terminals with their own backdrop.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments.console import codes


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers.

    ``*_highlight`` entries are bare SGR parameter lists (no ``ESC [`` / ``m``)
    because they are merged into existing sequences when highlighting.
    """

    name: str
    base: str
    reset: str
    title: str
    dim: str
    border_active: str
    border_inactive: str
    list_even: str
    list_odd: str
    list_selected: str
    search_active: str
    search_inactive: str
    cursor: str
    scrollbar_thumb: str
    match_highlight: str
    match_highlight_inactive: str
    selection_highlight: str


_WHITE_FG = "38;2;255;255;255"
_GRAY300_FG = "38;2;192;192;216"
_GRAY500_FG = "38;2;69;69;84"
_GRAY700_BG = "48;2;28;28;33"
_CHARCOAL_FG = "38;2;28;28;32"
_RED500_BG = "48;2;245;0;94"
_RED700_BG = "48;2;165;29;81"
_BLACK_FG = "38;2;0;0;0"

DEFAULT_THEME = UITheme(
    name="default",
    base=f"\033[{_WHITE_FG};{_GRAY700_BG}m",
    reset="\033[0m",
    title=codes["bold"],
    dim=f"\033[{_GRAY500_FG}m",
    border_active=f"\033[{_WHITE_FG}m",
    border_inactive=f"\033[{_GRAY500_FG}m",
    list_even=f"\033[{_WHITE_FG}m",
    list_odd=f"\033[{_GRAY300_FG}m",
    list_selected=f"\033[{_CHARCOAL_FG};{_RED500_BG}m",
    search_active=f"\033[{_WHITE_FG}m",
    search_inactive=f"\033[{_GRAY500_FG}m",
    cursor="\033[7m",
    scrollbar_thumb=f"\033[{_WHITE_FG}m",
    match_highlight=f"{_BLACK_FG};{_RED500_BG}",
    match_highlight_inactive=f"{_BLACK_FG};{_RED700_BG}",
    selection_highlight=f"{_BLACK_FG};{_RED500_BG}",
)

TRANSPARENT_THEME = UITheme(
    name="transparent",
    base=f"\033[{_WHITE_FG}m",
    reset="\033[0m",
    title=codes["bold"],
    dim=f"\033[{_GRAY500_FG}m",
    border_active=f"\033[{_WHITE_FG}m",
    border_inactive=f"\033[{_GRAY500_FG}m",
    list_even=f"\033[{_WHITE_FG}m",
    list_odd=f"\033[{_GRAY300_FG}m",
    list_selected=f"\033[{_CHARCOAL_FG};{_RED500_BG}m",
    search_active=f"\033[{_WHITE_FG}m",
    search_inactive=f"\033[{_GRAY500_FG}m",
    cursor="\033[7m",
    scrollbar_thumb=f"\033[{_WHITE_FG}m",
    match_highlight=f"{_BLACK_FG};{_RED500_BG}",
    match_highlight_inactive=f"{_BLACK_FG};{_RED700_BG}",
    selection_highlight=f"{_BLACK_FG};{_RED500_BG}",
)

PLAIN_THEME = UITheme(
    name="plain",
    base="",
    reset="\033[0m",
    title="",
    dim="",
    border_active="",
    border_inactive="",
    list_even="",
    list_odd="",
    list_selected="\033[7m",
    search_active="",
    search_inactive="",
    cursor="\033[7m",
    scrollbar_thumb="",
    match_highlight="7",
    match_highlight_inactive="7",
    selection_highlight="7",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    TRANSPARENT_THEME.name: TRANSPARENT_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "TRANSPARENT_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
