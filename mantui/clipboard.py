"""Best-effort clipboard sink backed by platform copy commands."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

logger = logging.getLogger(__name__)


def clipboard_commands() -> list[list[str]]:
    """Return candidate copy commands for the current platform, in preference order."""
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_text_to_clipboard(text: str) -> bool:
    """Copy UTF-8 ``text`` with the first available tool; return whether it worked."""
    if not text:
        return False

    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(
                command,
                input=text.encode("utf-8"),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except (OSError, subprocess.SubprocessError):
            logger.debug("clipboard command %s failed", command[0], exc_info=True)
            continue
        if proc.returncode == 0:
            logger.debug("copied %d chars with %s", len(text), command[0])
            return True
        logger.debug("clipboard command %s exited with %d", command[0], proc.returncode)
    logger.info("no clipboard tool accepted the selection")
    return False
