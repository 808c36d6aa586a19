# Path: core/models/__init__.py
# Purpose: Package initializer for domain models.
# Layer: core/models.
# Details: Re-exports statuses, filter and index descriptors, and the search session model.

from .domain import FilterDescriptor, IndexDescriptor, OperationStatus, SearchSession

__all__ = ["FilterDescriptor", "IndexDescriptor", "OperationStatus", "SearchSession"]
