# Path: core/services/base.py
# Purpose: Define the interfaces of external collaborators consumed by the orchestrator.
# Layer: core/services.
# Details: Search/index engine, file watcher, and settings persistence are implemented elsewhere.

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Protocol, Sequence

from config import UserSettings
from core.models.domain import FilterDescriptor, IndexDescriptor
from core.operations.cancellation import CancellationHandle


class SearchIndexService(Protocol):
    """Text index and search engine."""

    def get_available_file_filters(self, index: Optional[IndexDescriptor]) -> Sequence[FilterDescriptor]:
        """Return the file filters offered by ``index`` (an empty sequence when no index is open)."""

    def is_valid_index_directory(self, path: Path) -> bool:
        """Return True if ``path`` holds a usable index."""

    def search(
        self,
        index: Optional[IndexDescriptor],
        text: str,
        filters: Sequence[FilterDescriptor],
        handle: Optional[CancellationHandle],
    ) -> List[Any]:
        """Run a query, polling ``handle`` to stop early when cancellation is requested."""


class FileWatchService(Protocol):
    """Watches indexed source directories and triggers index updates when enabled."""

    is_enabled: bool


class SettingsStore(Protocol):
    """Persists user settings between application runs."""

    def load(self) -> UserSettings:
        """Return the persisted settings, or defaults when nothing is stored."""

    def save(self, settings: UserSettings) -> None:
        """Persist ``settings``."""


__all__ = ["FileWatchService", "SearchIndexService", "SettingsStore"]
