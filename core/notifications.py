# Path: core/notifications.py
# Purpose: Provide the change-notification channel consumed by the UI layer.
# Layer: core.
# Details: Every observable property is identified by an AppProperty tag and delivered through a Qt signal.

from __future__ import annotations

from enum import Enum
from typing import Any

from PySide6.QtCore import QObject, Signal


class AppProperty(Enum):
    """Tags identifying which observable property changed."""

    STATUS = "status"
    IS_READY = "is_ready"
    CAN_CANCEL = "can_cancel"
    OPERATION_CANCELLED = "operation_cancelled"
    OPERATION_CHANGE_ATTEMPTED = "operation_change_attempted"
    SEARCHES = "searches"
    CURRENT_SEARCH = "current_search"
    SEARCH_HISTORY = "search_history"
    CURRENT_INDEX = "current_index"
    HAS_VALID_INDEX_DIRECTORY = "has_valid_index_directory"
    AUTO_UPDATE_INDEX = "auto_update_index"


class ObservableObject(QObject):
    """QObject base emitting ``propertyChanged(tag, value)`` for each observable change."""

    propertyChanged = Signal(object, object)

    def _notify(self, prop: AppProperty, value: Any) -> None:
        self.propertyChanged.emit(prop, value)


__all__ = ["AppProperty", "ObservableObject"]
