# Path: core/history/__init__.py
# Purpose: Package initializer for search history tracking.
# Layer: core/history.
# Details: Exposes the MRU search history store.

from .store import DEFAULT_HISTORY_LIMIT, SearchHistoryStore

__all__ = ["DEFAULT_HISTORY_LIMIT", "SearchHistoryStore"]
