"""Public runtime orchestration entry points.

``run_viewer`` wires the controller, producer, loader and navigator together
and drives the draw/dispatch loop; ``run_main_loop`` is the loop on its own,
used by tests and composition code.
"""

from __future__ import annotations


def run_viewer(*args, **kwargs):
    """Lazily import the viewer entrypoint to avoid heavy bootstrap on import."""
    from .app import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import the loop runner to avoid package-import cycles."""
    from .app import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = ["run_main_loop", "run_viewer"]
