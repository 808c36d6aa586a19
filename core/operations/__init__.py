# Path: core/operations/__init__.py
# Purpose: Provide the operation gate and cancellation primitives.
# Layer: core/operations.
# Details: Exposes OperationStateMachine, CancellationCoordinator, and CancellationHandle.

from .cancellation import CancellationCoordinator, CancellationHandle
from .state_machine import OperationStateMachine

__all__ = ["CancellationCoordinator", "CancellationHandle", "OperationStateMachine"]
