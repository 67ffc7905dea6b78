"""Raw manual-page fetching through ``man``.

The child runs with formatting kept (overstrike sequences) at a fixed output
width. An empty result is retried once with the lowercased name; anything
still empty is returned as ``""`` for the viewer to replace with a
placeholder document.
"""

from __future__ import annotations

import logging
import os
import subprocess

from .errors import ManualSourceError

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 30.0


def strip_section(command: str) -> str:
    """Drop a trailing ``(section)`` suffix: ``"ls(1)" -> "ls"``."""
    command = command.strip()
    if command.endswith(")"):
        pos = command.rfind("(")
        if pos > 0:
            return command[:pos].strip()
    return command


def _manual_env(width: int) -> dict[str, str]:
    env = dict(os.environ)
    env.update(
        {
            "MANWIDTH": str(max(1, width)),
            "LC_ALL": "C",
            "MAN_KEEP_FORMATTING": "1",
            "GROFF_NO_SGR": "1",
            "MANPAGER": "cat",
            "PAGER": "cat",
        }
    )
    return env


def run_man(name: str, width: int) -> str:
    """Run ``man name`` and return its raw output."""
    try:
        proc = subprocess.run(
            ["man", name],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            env=_manual_env(width),
            text=True,
            errors="replace",
            check=False,
            timeout=FETCH_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise ManualSourceError(f"failed to run man for {name!r}: {exc}") from exc
    if proc.returncode != 0:
        raise ManualSourceError(f"man {name!r} exited with status {proc.returncode}")
    return proc.stdout


def _try_fetch(name: str, width: int) -> str:
    try:
        return run_man(name, width)
    except ManualSourceError as exc:
        logger.warning("%s", exc)
        return ""


def fetch_manual(command: str, width: int) -> str:
    """Return raw overstrike-formatted text for ``command`` or ``""``."""
    name = strip_section(command)
    if not name:
        return ""
    text = _try_fetch(name, width)
    if not text.strip() and name.lower() != name:
        logger.info("retrying manual fetch for %r as %r", name, name.lower())
        text = _try_fetch(name.lower(), width)
    return text
