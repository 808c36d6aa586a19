# Path: core/sessions/registry.py
# Purpose: Keep the ordered collection of search sessions and the current session.
# Layer: core/sessions.
# Details: At least one session always exists; removing the last one resets it in place.

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from PySide6.QtCore import QObject

from core.models.domain import FilterDescriptor, SearchSession
from core.notifications import AppProperty, ObservableObject

logger = logging.getLogger(__name__)


class SearchSessionRegistry(ObservableObject):
    """Ordered search sessions plus a pointer to the current one.

    When the current session is removed, the first remaining session becomes current.
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._sessions: List[SearchSession] = []
        self._current: Optional[SearchSession] = None

    @property
    def sessions(self) -> Tuple[SearchSession, ...]:
        return tuple(self._sessions)

    @property
    def current_session(self) -> Optional[SearchSession]:
        return self._current

    @current_session.setter
    def current_session(self, session: SearchSession) -> None:
        self._index_of(session)
        self._set_current(session)

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[SearchSession]:
        return iter(tuple(self._sessions))

    def add_session(
        self,
        initial_filter_enabled: bool,
        available_filters: Sequence[FilterDescriptor],
    ) -> SearchSession:
        """Create a session with the given defaults, append it and make it current."""

        session = SearchSession(
            is_filter_enabled=initial_filter_enabled,
            default_filter_enabled=initial_filter_enabled,
        )
        session.update_available_filters(available_filters)
        self._sessions.append(session)
        logger.info("Added search session (%d open)", len(self._sessions))
        self._notify(AppProperty.SEARCHES, self.sessions)
        self._set_current(session)
        return session

    def remove_session(self, session: SearchSession) -> None:
        """Remove ``session``, or reset it when it is the only one left."""

        index = self._index_of(session)
        if len(self._sessions) == 1:
            session.reset()
            logger.info("Reset the last remaining search session")
            self._notify(AppProperty.SEARCHES, self.sessions)
            self._set_current(session)
            return

        del self._sessions[index]
        logger.info("Removed search session (%d open)", len(self._sessions))
        self._notify(AppProperty.SEARCHES, self.sessions)
        if self._current is session:
            self._set_current(self._sessions[0])

    def refresh_available_filters(self, all_filters: Sequence[FilterDescriptor]) -> None:
        """Push the filters of the newly opened index to every session."""

        filters = tuple(all_filters)
        for session in self._sessions:
            session.update_available_filters(filters)
        logger.debug("Refreshed %d filters on %d sessions", len(filters), len(self._sessions))
        self._notify(AppProperty.SEARCHES, self.sessions)

    def _index_of(self, session: SearchSession) -> int:
        for index, candidate in enumerate(self._sessions):
            if candidate is session:
                return index
        raise KeyError("Search session is not registered")

    def _set_current(self, session: SearchSession) -> None:
        if self._current is session:
            return
        self._current = session
        self._notify(AppProperty.CURRENT_SEARCH, session)


__all__ = ["SearchSessionRegistry"]
