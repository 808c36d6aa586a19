# Path: core/history/store.py
# Purpose: Maintain the most-recently-used list of search queries.
# Layer: core/history.
# Details: Bounded, de-duplicated by value, most recent first; respects the user's history setting.

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from PySide6.QtCore import QObject

from config import SearchSettings
from core.notifications import AppProperty, ObservableObject

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20


class SearchHistoryStore(ObservableObject):
    """MRU list of search texts.

    ``search_settings`` is read on every record, so toggling
    ``enable_search_history`` at runtime takes effect immediately.
    """

    def __init__(
        self,
        search_settings: SearchSettings,
        entries: Iterable[str] = (),
        limit: int = DEFAULT_HISTORY_LIMIT,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        if limit < 1:
            raise ValueError("History limit must be at least 1.")
        self._settings = search_settings
        self._limit = limit
        self._entries: List[str] = []
        for text in entries:
            if text and text not in self._entries:
                self._entries.append(text)
        del self._entries[limit:]

    @property
    def limit(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __contains__(self, text: object) -> bool:
        return text in self._entries

    def snapshot(self) -> Tuple[str, ...]:
        """Return the history, most recent first."""

        return tuple(self._entries)

    def record(self, text: str) -> bool:
        """Move ``text`` to the front of the history. Returns True when the history changed."""

        if not self._settings.enable_search_history or not text:
            return False

        if text in self._entries:
            index = self._entries.index(text)
            if index == 0:
                return False
            self._entries.insert(0, self._entries.pop(index))
        else:
            self._entries.insert(0, text)
            while len(self._entries) > self._limit:
                evicted = self._entries.pop()
                logger.debug("Evicted %r from search history", evicted)

        self._notify(AppProperty.SEARCH_HISTORY, self.snapshot())
        return True


__all__ = ["DEFAULT_HISTORY_LIMIT", "SearchHistoryStore"]
