"""
Contexts module.

Manages the audiences a user discloses names to.

Public API:
- IContextService: Interface for context operations
- Context: A stored context
"""

from .interfaces import IContextService
from .models import (
    Context,
    ContextWithStats,
    ContextListResponse,
    CreateContextRequest,
    UpdateContextRequest,
    ContextDeletionCheck,
    DeleteContextResponse,
    DeletionImpact,
)
from .exceptions import (
    ContextNotFoundError,
    ContextNameTakenError,
    PermanentContextError,
    ContextHasAssignmentsError,
)

__all__ = [
    # Interface
    "IContextService",
    # Models
    "Context",
    "ContextWithStats",
    "ContextListResponse",
    "CreateContextRequest",
    "UpdateContextRequest",
    "ContextDeletionCheck",
    "DeleteContextResponse",
    "DeletionImpact",
    # Exceptions
    "ContextNotFoundError",
    "ContextNameTakenError",
    "PermanentContextError",
    "ContextHasAssignmentsError",
]
