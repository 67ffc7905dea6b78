"""External manual-page sources: section listings and raw page text."""

from .errors import ManualSourceError
from .fetcher import fetch_manual, strip_section
from .lister import list_section, parse_listing

__all__ = [
    "ManualSourceError",
    "fetch_manual",
    "list_section",
    "parse_listing",
    "strip_section",
]
