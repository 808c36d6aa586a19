# Path: core/services/__init__.py
# Purpose: Provide collaborator interfaces and the bundled settings store.
# Layer: core/services.
# Details: Exposes SearchIndexService, FileWatchService, SettingsStore, and JsonSettingsStore.

from .base import FileWatchService, SearchIndexService, SettingsStore
from .settings_store import JsonSettingsStore

__all__ = ["FileWatchService", "JsonSettingsStore", "SearchIndexService", "SettingsStore"]
