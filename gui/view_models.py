# Path: gui/view_models.py
# Purpose: Provide view models mediating between GUI interactions and the orchestrator.
# Layer: gui.
# Details: Runs searches through the operation gate and records completed queries in the history.

from __future__ import annotations

import logging
from typing import Any, List, Optional

from core.models.domain import OperationStatus, SearchSession
from core.operations import CancellationHandle
from core.orchestrator import ApplicationOrchestrator

logger = logging.getLogger(__name__)


class SearchViewModel:
    """View model encapsulating search execution for the GUI."""

    def __init__(self, orchestrator: ApplicationOrchestrator) -> None:
        self.orchestrator = orchestrator

    def run_search(self, session: SearchSession, text: str) -> Optional[List[Any]]:
        """Search ``text`` in the current index on behalf of ``session``.

        Returns None when another operation is running or the search was cancelled.

        External calls:
        - core/services/base.py::SearchIndexService.search - executes the query against the open index.
        """

        session.search_text = text
        filters = list(session.selected_filters) if session.is_filter_enabled else []

        def work(handle: CancellationHandle) -> List[Any]:
            return self.orchestrator.index_service.search(self.orchestrator.current_index, text, filters, handle)

        outcome = self.orchestrator.run_operation(OperationStatus.SEARCHING, work)
        if not outcome.started or outcome.cancelled:
            logger.debug("Search for %r did not complete", text)
            return None

        session.results = outcome.value
        self.orchestrator.add_to_search_history(text)
        return outcome.value
