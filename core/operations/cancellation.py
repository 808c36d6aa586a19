# Path: core/operations/cancellation.py
# Purpose: Issue and track the cancellation handle of the currently running operation.
# Layer: core/operations.
# Details: Cancellation is cooperative; the handle only records the request for the operation to poll.

from __future__ import annotations

import logging
from typing import Optional

from core.errors import InvariantViolationError, OperationCancelledError

logger = logging.getLogger(__name__)


class CancellationHandle:
    """Token owned by one in-flight operation.

    The cancellation flag can be set once; later requests are ignored. After the
    operation ends the handle is released and no longer accepts requests.
    """

    def __init__(self) -> None:
        self._cancellation_requested = False
        self._released = False

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancellation_requested

    @property
    def is_released(self) -> bool:
        return self._released

    def cancel(self) -> bool:
        """Record a cancellation request. Returns True only for the first request."""

        if self._released or self._cancellation_requested:
            return False
        self._cancellation_requested = True
        return True

    def raise_if_cancelled(self) -> None:
        """Stop a cooperative operation that has been asked to cancel."""

        if self._cancellation_requested:
            raise OperationCancelledError("Operation cancelled by request.")

    def _release(self) -> None:
        self._released = True

    def __repr__(self) -> str:
        return (
            f"CancellationHandle(cancellation_requested={self._cancellation_requested}, "
            f"released={self._released})"
        )


class CancellationCoordinator:
    """Hold at most one live CancellationHandle at a time."""

    def __init__(self) -> None:
        self._current: Optional[CancellationHandle] = None

    @property
    def current(self) -> Optional[CancellationHandle]:
        return self._current

    @property
    def has_handle(self) -> bool:
        return self._current is not None

    def issue(self) -> CancellationHandle:
        """Create the handle for a newly started operation."""

        if self._current is not None:
            raise InvariantViolationError("A cancellation handle is already issued for the running operation.")
        self._current = CancellationHandle()
        return self._current

    def request_cancel(self) -> bool:
        """Mark the current handle as cancelled; False when there is nothing new to cancel."""

        if self._current is None:
            return False
        requested = self._current.cancel()
        if requested:
            logger.debug("Cancellation requested for the running operation")
        return requested

    def release(self) -> Optional[CancellationHandle]:
        """Discard the current handle and return it so the caller can inspect its final state."""

        handle, self._current = self._current, None
        if handle is not None:
            handle._release()
        return handle


__all__ = ["CancellationCoordinator", "CancellationHandle"]
