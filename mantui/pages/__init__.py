"""Pages of the viewer and the navigator switching between them."""

from .navigation import SPINNER_FRAMES, Navigator, install_global_listeners, terminal_size
from .routes import PageKind, Route

__all__ = [
    "Navigator",
    "PageKind",
    "Route",
    "SPINNER_FRAMES",
    "install_global_listeners",
    "terminal_size",
]
