"""Command-line front door for mantui.

Parses CLI options, merges them over the read-only config file, and either
prints a decoded manual page directly or launches the interactive viewer.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import shutil
import sys
import termios
from pathlib import Path

from .config import ViewerConfig, load_viewer_config
from .events import ChannelClosedError
from .logging_config import setup_logging
from .manual import fetch_manual
from .runtime import run_viewer
from .ui_theme import TRANSPARENT_THEME, available_theme_names, resolve_theme
from .viewer import TextBuffer

logger = logging.getLogger(__name__)


def _default_render_width() -> int:
    """Resolve default manual width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def render_manual_text(command: str, width: int, no_color: bool) -> str:
    """Fetch and decode ``command`` for non-interactive output."""
    buffer = TextBuffer.from_raw(fetch_manual(command, width), command)
    lines = buffer.plain_lines if no_color else buffer.styled_lines
    return "".join(f"{line}\n" for line in lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mantui",
        description="Search, browse and read man pages in the terminal.",
    )
    parser.add_argument("command", nargs="?", default=None, help="Open this manual page directly.")
    parser.add_argument(
        "--transparent",
        action="store_true",
        help="Use the theme without background fill.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--nopager",
        action="store_true",
        help="Print the manual page directly without the interactive viewer.",
    )
    return parser


def resolve_config(args: argparse.Namespace, base: ViewerConfig) -> ViewerConfig:
    """Apply CLI overrides on top of the config-file values."""
    theme = base.theme
    if args.theme:
        theme = args.theme
    if args.transparent:
        theme = TRANSPARENT_THEME.name
    return dataclasses.replace(
        base,
        theme=theme,
        log_file=args.log_file if args.log_file is not None else base.log_file,
        no_color=args.no_color,
    )


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the viewer.

    ``argv`` is primarily for tests; when omitted ``sys.argv`` is used. Exits
    non-zero when the terminal cannot be initialized or the input channel dies.
    """
    args = build_parser().parse_args(argv)
    config = resolve_config(args, load_viewer_config())
    setup_logging(config.log_file)

    if args.nopager or not sys.stdin.isatty():
        if not args.command:
            raise SystemExit("A command name is required when not running interactively.")
        sys.stdout.write(render_manual_text(args.command, _default_render_width(), config.no_color))
        return

    theme = resolve_theme(config.theme, no_color=config.no_color)
    try:
        run_viewer(args.command, config, theme)
    except (termios.error, OSError) as exc:
        logger.exception("terminal failure")
        print(f"mantui: terminal error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except ChannelClosedError as exc:
        logger.exception("input channel closed")
        print("mantui: lost terminal input", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
