"""Concrete source adapters for a Chromium-family browser."""

from .base import BlockingSource, SourceAdapter, SourceError
from .bookmarks import BookmarkSource
from .history import HistorySource
from .suggestions import SuggestionSource
from .tabs import TabSource, activate_tab

__all__ = [
    "BlockingSource",
    "SourceAdapter",
    "SourceError",
    "TabSource",
    "HistorySource",
    "SuggestionSource",
    "BookmarkSource",
    "activate_tab",
]
