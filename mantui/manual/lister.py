"""Command listing for one manual section.

Runs ``apropos`` for the section and reduces its output to a sorted,
deduplicated list of command names. Errors are raised as
``ManualSourceError``; the section loader turns them into an empty list.
"""

from __future__ import annotations

import logging
import subprocess

from .errors import ManualSourceError

logger = logging.getLogger(__name__)

LIST_TIMEOUT_SECONDS = 30.0
BOILERPLATE_NAMES = frozenset({"intro"})


def _entry_names(line: str) -> list[str]:
    """Return the command names of one ``apropos`` line.

    Handles both ``name (1) - text`` and the BSD ``a(1), b(1) - text`` forms.
    """
    head, sep, _description = line.partition(" - ")
    if not sep:
        return []
    names: list[str] = []
    for part in head.split(","):
        name = part.strip()
        paren = name.find("(")
        if paren >= 0:
            name = name[:paren]
        name = name.strip()
        if name:
            names.append(name)
    return names


def is_listable(name: str) -> bool:
    """Reject names that start with punctuation and known boilerplate entries."""
    if not name or not name[0].isalnum():
        return False
    return name.lower() not in BOILERPLATE_NAMES


def parse_listing(output: str) -> list[str]:
    """Parse ``apropos`` output into deduplicated, ascending command names."""
    seen: set[str] = set()
    for line in output.splitlines():
        for name in _entry_names(line):
            if is_listable(name):
                seen.add(name)
    return sorted(seen)


def list_section(section: int) -> list[str]:
    """Return the command names documented in manual ``section``."""
    command = ["apropos", "-s", str(section), "."]
    try:
        proc = subprocess.run(
            command,
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
            timeout=LIST_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise ManualSourceError(f"failed to run {command[0]}: {exc}") from exc
    if proc.returncode != 0:
        raise ManualSourceError(f"{command[0]} exited with status {proc.returncode}")
    names = parse_listing(proc.stdout)
    logger.info("listed %d commands for section %d", len(names), section)
    return names
