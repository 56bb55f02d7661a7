"""
Names module.

Manages a user's name variants and their preferred name.

Public API:
- INameService: Interface for name operations
- Name: A stored name variant
- CreateNameRequest / UpdateNameRequest: Request schemas
"""

from .interfaces import INameService
from .models import (
    Name,
    NameCategory,
    Category,
    DeletionReason,
    CreateNameRequest,
    UpdateNameRequest,
    NameListResponse,
    NameDeletionCheck,
    DeleteNameResponse,
)
from .exceptions import NameNotFoundError, NameDeletionBlockedError

__all__ = [
    # Interface
    "INameService",
    # Models
    "Name",
    "NameCategory",
    "Category",
    "DeletionReason",
    "CreateNameRequest",
    "UpdateNameRequest",
    "NameListResponse",
    "NameDeletionCheck",
    "DeleteNameResponse",
    # Exceptions
    "NameNotFoundError",
    "NameDeletionBlockedError",
]
