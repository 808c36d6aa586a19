# Path: core/errors.py
# Purpose: Define exceptions raised by the orchestration core.
# Layer: core.
# Details: Only caller misuse raises; contention and cancellation are reported through return values and pulses.


class InvariantViolationError(RuntimeError):
    """Raised when a caller drives the application state into an invalid configuration."""


class OperationCancelledError(Exception):
    """Raised by cooperative operations that observed a cancellation request."""


__all__ = ["InvariantViolationError", "OperationCancelledError"]
