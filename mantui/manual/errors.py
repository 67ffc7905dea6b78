"""Errors raised by the manual-page collaborators."""

from __future__ import annotations


class ManualSourceError(RuntimeError):
    """An external ``man``/``apropos`` invocation failed or could not start."""
