# Path: core/orchestrator.py
# Purpose: Compose the operation gate, search sessions, and search history for the UI.
# Layer: core.
# Details: Wires sessions to the search/index service and the auto-update flag to the file watcher.

from __future__ import annotations

import logging
from typing import Any, Callable, NamedTuple, Optional, Tuple

from PySide6.QtCore import QObject

from config import AppSettings, UserSettings, configure_logging
from core.errors import OperationCancelledError
from core.history import SearchHistoryStore
from core.models.domain import IndexDescriptor, OperationStatus, SearchSession
from core.notifications import AppProperty, ObservableObject
from core.operations import CancellationHandle, OperationStateMachine
from core.services.base import FileWatchService, SearchIndexService, SettingsStore
from core.services.settings_store import JsonSettingsStore
from core.sessions import SearchSessionRegistry

logger = logging.getLogger(__name__)


class OperationResult(NamedTuple):
    """Outcome of :meth:`ApplicationOrchestrator.run_operation`."""

    started: bool
    cancelled: bool = False
    value: Any = None


class ApplicationOrchestrator(ObservableObject):
    """Application-level state shared by every view.

    Notifications of the composed components are relayed on this object's
    ``propertyChanged`` signal, so the UI only needs to subscribe once.
    """

    def __init__(
        self,
        settings: AppSettings,
        index_service: SearchIndexService,
        file_watcher: Optional[FileWatchService] = None,
        settings_store: Optional[SettingsStore] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.settings = settings
        self.index_service = index_service
        self.file_watcher = file_watcher
        self.settings_store: SettingsStore = settings_store or JsonSettingsStore(settings.settings_path)
        self._current_index: Optional[IndexDescriptor] = None

        self.operations = OperationStateMachine(settings.preview_saved_delay_ms, parent=self)
        self.operations.propertyChanged.connect(self.propertyChanged)

        self._auto_update_index = settings.auto_update_index
        if file_watcher is not None:
            file_watcher.is_enabled = self._auto_update_index

        self.user_settings: UserSettings = self.settings_store.load()
        self.history = SearchHistoryStore(
            self.user_settings.search,
            entries=self.user_settings.search_history,
            limit=settings.history_limit,
            parent=self,
        )
        self.history.propertyChanged.connect(self.propertyChanged)

        self.sessions = SearchSessionRegistry(parent=self)
        self.sessions.propertyChanged.connect(self.propertyChanged)
        self.add_search()

    # Operation gate
    @property
    def status(self) -> OperationStatus:
        return self.operations.status

    @property
    def is_ready(self) -> bool:
        return self.operations.is_ready

    @property
    def can_cancel(self) -> bool:
        return self.operations.can_cancel

    def begin_operation(self, kind: OperationStatus) -> bool:
        return self.operations.begin_operation(kind)

    def begin_cancellable_operation(self, kind: OperationStatus) -> Tuple[bool, Optional[CancellationHandle]]:
        return self.operations.begin_cancellable_operation(kind)

    def end_operation(self) -> None:
        self.operations.end_operation()

    def cancel_current_operation(self) -> None:
        self.operations.cancel_current_operation()

    def signal_preview_saved(self) -> None:
        self.operations.signal_preview_saved()

    def run_operation(
        self,
        kind: OperationStatus,
        work: Callable[[CancellationHandle], Any],
    ) -> OperationResult:
        """Run ``work`` as a cancellable operation of ``kind``.

        ``started`` is False when another operation is in progress. ``cancelled``
        is True when ``work`` stopped with OperationCancelledError, or returned
        after cancellation was requested; ``value`` is then None. The operation
        is always ended, even if ``work`` raises.
        """

        started, handle = self.operations.begin_cancellable_operation(kind)
        if not started or handle is None:
            return OperationResult(started=False)

        try:
            value = work(handle)
        except OperationCancelledError:
            logger.info("%s stopped after a cancellation request", kind.value)
            return OperationResult(started=True, cancelled=True)
        finally:
            self.operations.end_operation()

        if handle.is_cancellation_requested:
            return OperationResult(started=True, cancelled=True)
        return OperationResult(started=True, value=value)

    # Sessions
    @property
    def searches(self) -> Tuple[SearchSession, ...]:
        return self.sessions.sessions

    @property
    def current_search(self) -> Optional[SearchSession]:
        return self.sessions.current_session

    @current_search.setter
    def current_search(self, session: SearchSession) -> None:
        self.sessions.current_session = session

    def add_search(self) -> SearchSession:
        """Open a new search session preconfigured for the current index."""

        filters = self.index_service.get_available_file_filters(self._current_index)
        return self.sessions.add_session(self.user_settings.search.enable_filter_by_default, filters)

    def remove_search(self, session: SearchSession) -> None:
        self.sessions.remove_session(session)

    def update_search_filter(self) -> None:
        """Reload the file filters of the current index into every session."""

        filters = self.index_service.get_available_file_filters(self._current_index)
        self.sessions.refresh_available_filters(filters)

    # Index
    @property
    def current_index(self) -> Optional[IndexDescriptor]:
        return self._current_index

    @current_index.setter
    def current_index(self, index: Optional[IndexDescriptor]) -> None:
        if index == self._current_index:
            return
        self._current_index = index
        logger.info("Current index -> %s", index.name if index else None)
        # Sessions carry the new index's filters before anyone hears about the index.
        self.update_search_filter()
        self._notify(AppProperty.CURRENT_INDEX, index)
        self._notify(AppProperty.HAS_VALID_INDEX_DIRECTORY, self.has_valid_index_directory)

    @property
    def has_valid_index_directory(self) -> bool:
        return self._current_index is not None and self.index_service.is_valid_index_directory(
            self._current_index.index_directory
        )

    @property
    def auto_update_index(self) -> bool:
        return self._auto_update_index

    @auto_update_index.setter
    def auto_update_index(self, value: bool) -> None:
        if value == self._auto_update_index:
            return
        self._auto_update_index = value
        if self.file_watcher is not None:
            self.file_watcher.is_enabled = value
        self._notify(AppProperty.AUTO_UPDATE_INDEX, value)

    # History and settings
    @property
    def search_history(self) -> Tuple[str, ...]:
        return self.history.snapshot()

    def add_to_search_history(self, text: str) -> None:
        self.history.record(text)

    def save_settings(self) -> None:
        """Write the history snapshot and user settings through the settings store."""

        self.user_settings.search_history = list(self.history.snapshot())
        self.settings_store.save(self.user_settings)


def create_orchestrator(
    settings: AppSettings,
    index_service: SearchIndexService,
    file_watcher: Optional[FileWatchService] = None,
    settings_store: Optional[SettingsStore] = None,
) -> ApplicationOrchestrator:
    """Configure logging from ``settings`` and build the application orchestrator."""

    configure_logging(settings)
    logger.info("Starting orchestrator (settings at %s)", settings.settings_path)
    return ApplicationOrchestrator(
        settings,
        index_service,
        file_watcher=file_watcher,
        settings_store=settings_store,
    )


__all__ = ["ApplicationOrchestrator", "OperationResult", "create_orchestrator"]
