"""Read-only JSON configuration.

Looks up ``config.json`` in the platform config directory. Nothing is ever
written back: the viewer keeps no state between runs. Missing, unreadable,
or malformed values fall back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "mantui"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_TICK_MS = 100
DEFAULT_DEBOUNCE_MS = 200


@dataclass(frozen=True)
class ViewerConfig:
    """Startup settings resolved from config file and CLI overrides."""

    theme: str | None = None
    tick_ms: int = DEFAULT_TICK_MS
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    log_file: Path | None = None
    no_color: bool = False

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000.0

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _positive_int(value: object, default: int) -> int:
    """Accept strictly positive integers; booleans and other types fall back."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _optional_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_viewer_config(path: Path | None = None) -> ViewerConfig:
    """Build a ``ViewerConfig`` from the config file, validating every key."""
    data = load_config(path)
    log_file = _optional_str(data.get("log_file"))
    return ViewerConfig(
        theme=_optional_str(data.get("theme")),
        tick_ms=_positive_int(data.get("tick_ms"), DEFAULT_TICK_MS),
        debounce_ms=_positive_int(data.get("debounce_ms"), DEFAULT_DEBOUNCE_MS),
        log_file=Path(log_file).expanduser() if log_file else None,
    )
