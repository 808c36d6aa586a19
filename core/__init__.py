# Path: core/__init__.py
# Purpose: Package initializer for core application layer.
# Layer: core.
# Details: Aggregates operations, sessions, history, services, models, and the orchestrator.
