# Path: core/operations/state_machine.py
# Purpose: Gate exclusive access to the single long-running operation and expose its status.
# Layer: core/operations.
# Details: Single-flight gate, cooperative cancellation, pulse notifications, and the timed Saved state.

from __future__ import annotations

import logging
from typing import Optional, Tuple

from PySide6.QtCore import QObject, QTimer

from core.errors import InvariantViolationError
from core.models.domain import OperationStatus
from core.notifications import AppProperty, ObservableObject
from .cancellation import CancellationCoordinator, CancellationHandle

logger = logging.getLogger(__name__)

_NON_OPERATION_STATUSES = (OperationStatus.READY, OperationStatus.SAVED)


class OperationStateMachine(ObservableObject):
    """Track the application status and allow one operation at a time.

    All calls are expected on the thread that owns this object. A rejected
    begin is a normal outcome: it returns False and pulses
    ``OPERATION_CHANGE_ATTEMPTED``. There is no queue.
    """

    def __init__(self, preview_saved_delay_ms: int = 1000, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._status = OperationStatus.READY
        self._generation = 0
        self._cancellation = CancellationCoordinator()
        self._operation_cancelled = False
        self._operation_change_attempted = False

        # Child of self so the revert is delivered on the owner's thread.
        self._revert_generation: Optional[int] = None
        self._revert_timer = QTimer(self)
        self._revert_timer.setSingleShot(True)
        self._revert_timer.setInterval(preview_saved_delay_ms)
        self._revert_timer.timeout.connect(self._on_revert_timeout)

    # Observable state
    @property
    def status(self) -> OperationStatus:
        return self._status

    @property
    def is_ready(self) -> bool:
        return self._status is OperationStatus.READY

    @property
    def can_cancel(self) -> bool:
        return self._cancellation.has_handle

    @property
    def current_handle(self) -> Optional[CancellationHandle]:
        return self._cancellation.current

    @property
    def operation_cancelled(self) -> bool:
        return self._operation_cancelled

    @property
    def operation_change_attempted(self) -> bool:
        return self._operation_change_attempted

    @property
    def generation(self) -> int:
        """Counter bumped on every status transition."""

        return self._generation

    # Transitions
    def begin_operation(self, kind: OperationStatus) -> bool:
        """Enter ``kind`` if the application is ready; otherwise pulse and return False."""

        self._ensure_operation_kind(kind)
        if not self.is_ready:
            self._reject(kind)
            return False

        self._set_status(kind)
        return True

    def begin_cancellable_operation(self, kind: OperationStatus) -> Tuple[bool, Optional[CancellationHandle]]:
        """Same gate as :meth:`begin_operation`, additionally issuing a cancellation handle."""

        self._ensure_operation_kind(kind)
        if not self.is_ready:
            self._reject(kind)
            return False, None

        handle = self._cancellation.issue()
        self._set_status(kind)
        self._notify(AppProperty.CAN_CANCEL, True)
        return True, handle

    def end_operation(self) -> None:
        """Return to READY, pulsing ``OPERATION_CANCELLED`` if cancellation had been requested."""

        if self._status in _NON_OPERATION_STATUSES:
            raise InvariantViolationError(
                f"end_operation() called while no operation is active ({self._status.value})."
            )

        handle = self._cancellation.release()
        if handle is not None:
            self._notify(AppProperty.CAN_CANCEL, False)

        logger.debug("Operation %s ended", self._status.value)
        self._set_status(OperationStatus.READY)

        if handle is not None and handle.is_cancellation_requested:
            logger.info("Operation was cancelled")
            self._pulse_operation_cancelled()

    def cancel_current_operation(self) -> None:
        """Request cooperative cancellation of the running operation, if it supports it."""

        if self.is_ready or not self._cancellation.has_handle:
            return
        self._cancellation.request_cancel()

    def signal_preview_saved(self) -> None:
        """Show SAVED immediately and revert to READY after the configured delay."""

        if self._status not in _NON_OPERATION_STATUSES:
            raise InvariantViolationError(
                f"signal_preview_saved() called while {self._status.value} is running."
            )

        self._set_status(OperationStatus.SAVED)
        self._revert_generation = self._generation
        self._revert_timer.start()

    # Internals
    def _ensure_operation_kind(self, kind: OperationStatus) -> None:
        if kind in _NON_OPERATION_STATUSES:
            raise InvariantViolationError(f"{kind.value} is not an operation kind.")

    def _reject(self, kind: OperationStatus) -> None:
        logger.warning("Rejected %s: %s is in progress", kind.value, self._status.value)
        self._pulse_operation_change_attempted()

    def _set_status(self, status: OperationStatus) -> None:
        self._revert_timer.stop()
        self._generation += 1
        self._status = status
        logger.debug("Status -> %s (generation %d)", status.value, self._generation)
        self._notify(AppProperty.STATUS, status)
        self._notify(AppProperty.IS_READY, self.is_ready)

    def _on_revert_timeout(self) -> None:
        if self._revert_generation != self._generation or self._status is not OperationStatus.SAVED:
            return
        self._revert_generation = None
        self._set_status(OperationStatus.READY)

    def _pulse_operation_cancelled(self) -> None:
        self._operation_cancelled = True
        self._notify(AppProperty.OPERATION_CANCELLED, True)
        self._operation_cancelled = False
        self._notify(AppProperty.OPERATION_CANCELLED, False)

    def _pulse_operation_change_attempted(self) -> None:
        self._operation_change_attempted = True
        self._notify(AppProperty.OPERATION_CHANGE_ATTEMPTED, True)
        self._operation_change_attempted = False
        self._notify(AppProperty.OPERATION_CHANGE_ATTEMPTED, False)


__all__ = ["OperationStateMachine"]
