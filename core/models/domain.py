# Path: core/models/domain.py
# Purpose: Define domain models shared across operations, sessions, and the orchestrator.
# Layer: core/models.
# Details: Lightweight dataclasses and enums passed between GUI view models and core services.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple


class OperationStatus(Enum):
    """Status of the single long-running activity the application may run."""

    READY = "ready"
    INDEXING = "indexing"
    SEARCHING = "searching"
    SAVING = "saving"
    SAVED = "saved"


@dataclass(frozen=True)
class FilterDescriptor:
    """Named file filter offered by an index, e.g. ``Python`` -> ``("*.py",)``."""

    name: str
    patterns: Tuple[str, ...] = ()


@dataclass(frozen=True)
class IndexDescriptor:
    """An index the user can open and search."""

    name: str
    index_directory: Path
    source_directories: Tuple[Path, ...] = ()


@dataclass(eq=False)
class SearchSession:
    """Independent query workspace holding its own filter configuration and results.

    Sessions compare by identity; two sessions with identical content are still distinct.
    """

    is_filter_enabled: bool = False
    available_filters: Tuple[FilterDescriptor, ...] = ()
    selected_filters: List[FilterDescriptor] = field(default_factory=list)
    search_text: str = ""
    results: Optional[List[Any]] = None
    default_filter_enabled: bool = False

    def update_available_filters(self, filters: Sequence[FilterDescriptor]) -> None:
        """Replace the offered filters and drop selections that are no longer offered."""

        self.available_filters = tuple(filters)
        self.selected_filters = [f for f in self.selected_filters if f in self.available_filters]

    def reset(self) -> None:
        """Restore the state the session had when it was created."""

        self.is_filter_enabled = self.default_filter_enabled
        self.selected_filters = []
        self.search_text = ""
        self.results = None
