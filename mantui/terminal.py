"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, and mouse capture, and
guarantees the terminal is restored on every exit path: normal return,
exceptions, interpreter exit, and termination signals.
"""

from __future__ import annotations

import atexit
import contextlib
import os
import signal
import termios
import tty

_ENTER_TUI = b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1002h\x1b[?1006h"
_LEAVE_TUI = b"\x1b[?1000l\x1b[?1002l\x1b[?1006l\x1b[?25h\x1b[?1049l"


def _raise_system_exit(signum, _frame) -> None:
    # A closed terminal window (SIGHUP) counts as a normal quit.
    raise SystemExit(0 if signum == signal.SIGHUP else 128 + signum)


class TerminalController:
    """Manage terminal mode transitions for the interactive viewer."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._tui_active = False
        self._guards_installed = False

    @property
    def tui_active(self) -> bool:
        return self._tui_active

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with mouse capture enabled."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self._tui_active = True
        # Enter alternate screen, hide cursor, and enable button/drag mouse reports.
        os.write(self.stdout_fd, _ENTER_TUI)

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state; safe to call more than once."""
        if not self._tui_active:
            return
        self._tui_active = False
        try:
            os.write(self.stdout_fd, _LEAVE_TUI)
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def install_exit_guards(self) -> None:
        """Restore the terminal at interpreter exit and turn SIGTERM/SIGHUP into ``SystemExit``."""
        if self._guards_installed:
            return
        self._guards_installed = True
        atexit.register(self.disable_tui_mode)
        for signum in (signal.SIGTERM, signal.SIGHUP):
            signal.signal(signum, _raise_system_exit)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        self.install_exit_guards()
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
