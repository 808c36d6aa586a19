# Path: tests/conftest.py
# Purpose: Shared fixtures for orchestration tests.
# Layer: tests.
# Details: Provides a Qt core application, an event-loop pump, notification recorders, and fake collaborators.

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple

import pytest
from PySide6.QtCore import QCoreApplication, QEventLoop

from config import AppSettings, UserSettings
from core.models.domain import FilterDescriptor, IndexDescriptor
from core.notifications import AppProperty
from core.operations import CancellationHandle
from core.orchestrator import ApplicationOrchestrator


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def wait_until(qapp) -> Callable[..., bool]:
    """Pump the Qt event loop until ``predicate`` holds or the timeout expires."""

    def _wait(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
        deadline = time.monotonic() + timeout
        while not predicate():
            if time.monotonic() > deadline:
                return False
            qapp.processEvents(QEventLoop.ProcessEventsFlag.AllEvents, 10)
            time.sleep(0.005)
        return True

    return _wait


class Recorder:
    """Collect ``propertyChanged`` emissions."""

    def __init__(self) -> None:
        self.events: List[Tuple[AppProperty, Any]] = []

    def record(self, prop: AppProperty, value: Any) -> None:
        self.events.append((prop, value))

    def values(self, prop: AppProperty) -> List[Any]:
        return [value for tag, value in self.events if tag is prop]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


class FakeIndexService:
    def __init__(self, filters: Sequence[FilterDescriptor] = (), valid_dirs: Sequence[Path] = ()) -> None:
        self.filters = {None: tuple(filters)}
        self.valid_dirs = set(valid_dirs)
        self.results: List[Any] = ["match"]
        self.searches: List[Tuple[Optional[IndexDescriptor], str, List[FilterDescriptor]]] = []
        self.on_search: Optional[Callable[[CancellationHandle], None]] = None

    def get_available_file_filters(self, index):
        return self.filters.get(index, ())

    def is_valid_index_directory(self, path):
        return path in self.valid_dirs

    def search(self, index, text, filters, handle):
        self.searches.append((index, text, list(filters)))
        if self.on_search is not None:
            self.on_search(handle)
        return list(self.results)


class FakeFileWatcher:
    def __init__(self) -> None:
        self.is_enabled = False


class MemorySettingsStore:
    def __init__(self, settings: Optional[UserSettings] = None) -> None:
        self.stored = settings or UserSettings()
        self.saved: List[UserSettings] = []

    def load(self) -> UserSettings:
        return self.stored.model_copy(deep=True)

    def save(self, settings: UserSettings) -> None:
        self.saved.append(settings.model_copy(deep=True))


@pytest.fixture
def index_service() -> FakeIndexService:
    return FakeIndexService(filters=[FilterDescriptor("Python", ("*.py",))])


@pytest.fixture
def file_watcher() -> FakeFileWatcher:
    return FakeFileWatcher()


@pytest.fixture
def settings_store() -> MemorySettingsStore:
    return MemorySettingsStore()


@pytest.fixture
def app_settings(tmp_path) -> AppSettings:
    return AppSettings(settings_path=tmp_path / "user_settings.json", preview_saved_delay_ms=20)


@pytest.fixture
def orchestrator(qapp, app_settings, index_service, file_watcher, settings_store) -> ApplicationOrchestrator:
    return ApplicationOrchestrator(
        app_settings,
        index_service,
        file_watcher=file_watcher,
        settings_store=settings_store,
    )
