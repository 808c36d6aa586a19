# Path: core/sessions/__init__.py
# Purpose: Package initializer for search session management.
# Layer: core/sessions.
# Details: Exposes the session registry.

from .registry import SearchSessionRegistry

__all__ = ["SearchSessionRegistry"]
