# Path: tests/test_operation_state_machine.py
# Purpose: Verify the single-flight operation gate, pulses, cancellation, and the timed Saved state.
# Layer: tests.

from __future__ import annotations

import pytest

from core.errors import InvariantViolationError
from core.models.domain import OperationStatus
from core.notifications import AppProperty
from core.operations import OperationStateMachine


@pytest.fixture
def machine(qapp, recorder) -> OperationStateMachine:
    machine = OperationStateMachine(preview_saved_delay_ms=20)
    machine.propertyChanged.connect(recorder.record)
    return machine


def test_starts_ready(machine):
    assert machine.status is OperationStatus.READY
    assert machine.is_ready
    assert not machine.can_cancel
    assert machine.current_handle is None


def test_begin_operation_moves_to_kind(machine, recorder):
    assert machine.begin_operation(OperationStatus.INDEXING) is True

    assert machine.status is OperationStatus.INDEXING
    assert not machine.is_ready
    assert not machine.can_cancel
    assert recorder.values(AppProperty.STATUS) == [OperationStatus.INDEXING]
    assert recorder.values(AppProperty.IS_READY) == [False]


def test_single_flight_rejects_until_end(machine, recorder):
    assert machine.begin_operation(OperationStatus.INDEXING)

    for kind in (OperationStatus.SEARCHING, OperationStatus.SAVING, OperationStatus.INDEXING):
        assert machine.begin_operation(kind) is False
        assert machine.begin_cancellable_operation(kind) == (False, None)
        assert machine.status is OperationStatus.INDEXING

    assert recorder.values(AppProperty.OPERATION_CHANGE_ATTEMPTED) == [True, False] * 6

    machine.end_operation()
    assert machine.begin_operation(OperationStatus.SEARCHING)


def test_rejection_pulse_is_observable_while_raised(machine):
    seen = []
    machine.propertyChanged.connect(
        lambda prop, value: seen.append(machine.operation_change_attempted)
        if prop is AppProperty.OPERATION_CHANGE_ATTEMPTED
        else None
    )
    machine.begin_operation(OperationStatus.SAVING)
    machine.begin_operation(OperationStatus.SEARCHING)

    assert seen == [True, False]
    assert machine.operation_change_attempted is False


def test_indexing_scenario(machine, recorder):
    started, handle = machine.begin_cancellable_operation(OperationStatus.INDEXING)
    assert started is True
    assert handle is not None
    assert machine.status is OperationStatus.INDEXING
    assert machine.is_ready is False
    assert machine.can_cancel

    assert machine.begin_operation(OperationStatus.SEARCHING) is False
    assert machine.status is OperationStatus.INDEXING
    assert recorder.values(AppProperty.OPERATION_CHANGE_ATTEMPTED) == [True, False]

    machine.end_operation()
    assert machine.status is OperationStatus.READY
    assert machine.is_ready
    assert not machine.can_cancel
    assert recorder.values(AppProperty.CAN_CANCEL) == [True, False]


def test_cancel_then_end_pulses_once(machine, recorder):
    _, handle = machine.begin_cancellable_operation(OperationStatus.SEARCHING)

    machine.cancel_current_operation()
    machine.cancel_current_operation()
    assert handle.is_cancellation_requested

    machine.end_operation()

    assert machine.status is OperationStatus.READY
    assert recorder.values(AppProperty.OPERATION_CANCELLED) == [True, False]
    assert handle.is_released


def test_end_without_cancel_does_not_pulse(machine, recorder):
    machine.begin_cancellable_operation(OperationStatus.SEARCHING)
    machine.end_operation()

    assert recorder.values(AppProperty.OPERATION_CANCELLED) == []


def test_cancel_while_ready_is_noop(machine, recorder):
    machine.cancel_current_operation()

    assert machine.status is OperationStatus.READY
    assert recorder.events == []


def test_cancel_without_handle_is_noop(machine, recorder):
    machine.begin_operation(OperationStatus.SAVING)
    machine.cancel_current_operation()
    machine.end_operation()

    assert recorder.values(AppProperty.OPERATION_CANCELLED) == []


def test_fresh_handle_per_operation(machine):
    _, first = machine.begin_cancellable_operation(OperationStatus.INDEXING)
    machine.cancel_current_operation()
    machine.end_operation()

    _, second = machine.begin_cancellable_operation(OperationStatus.INDEXING)

    assert second is not first
    assert not second.is_cancellation_requested
    assert first.cancel() is False


def test_end_operation_while_ready_raises(machine):
    with pytest.raises(InvariantViolationError):
        machine.end_operation()


@pytest.mark.parametrize("kind", [OperationStatus.READY, OperationStatus.SAVED])
def test_non_operation_kinds_are_rejected(machine, kind):
    with pytest.raises(InvariantViolationError):
        machine.begin_operation(kind)
    with pytest.raises(InvariantViolationError):
        machine.begin_cancellable_operation(kind)


def test_preview_saved_reverts_after_delay(machine, recorder, wait_until):
    machine.signal_preview_saved()

    assert machine.status is OperationStatus.SAVED
    assert not machine.is_ready
    assert wait_until(lambda: machine.status is OperationStatus.READY)
    assert recorder.values(AppProperty.STATUS) == [OperationStatus.SAVED, OperationStatus.READY]


def test_preview_saved_blocks_new_operations(machine):
    machine.signal_preview_saved()

    assert machine.begin_operation(OperationStatus.SEARCHING) is False
    assert machine.status is OperationStatus.SAVED


def test_repeated_preview_saved_reverts_once(machine, recorder, wait_until):
    machine.signal_preview_saved()
    machine.signal_preview_saved()

    assert wait_until(lambda: machine.status is OperationStatus.READY)
    # Give the superseded timer every chance to fire.
    wait_until(lambda: False, timeout=0.1)

    assert recorder.values(AppProperty.STATUS) == [
        OperationStatus.SAVED,
        OperationStatus.SAVED,
        OperationStatus.READY,
    ]


def test_stale_revert_does_not_clobber_newer_status(machine, wait_until):
    machine.signal_preview_saved()
    assert wait_until(lambda: machine.status is OperationStatus.READY)
    assert machine.begin_operation(OperationStatus.INDEXING)

    machine._on_revert_timeout()

    assert machine.status is OperationStatus.INDEXING


def test_end_operation_while_saved_raises(machine):
    machine.signal_preview_saved()

    with pytest.raises(InvariantViolationError):
        machine.end_operation()
    assert machine.status is OperationStatus.SAVED


def test_repeated_preview_saved_restarts_delay(machine, wait_until):
    machine.signal_preview_saved()
    first_generation = machine.generation
    machine.signal_preview_saved()

    assert machine.generation == first_generation + 1
    assert wait_until(lambda: machine.status is OperationStatus.READY)


def test_preview_saved_during_operation_raises(machine):
    machine.begin_operation(OperationStatus.SAVING)

    with pytest.raises(InvariantViolationError):
        machine.signal_preview_saved()
    assert machine.status is OperationStatus.SAVING
