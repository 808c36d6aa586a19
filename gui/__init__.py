# Path: gui/__init__.py
# Purpose: Package initializer for GUI layer.
# Layer: gui.
# Details: Provide lightweight exports of view models without importing any widgets.

from .view_models import SearchViewModel

__all__ = ["SearchViewModel"]
