"""
Resolution module.

Decides which of a user's names to disclose for a context or OIDC property.

Public API:
- IResolutionService: Interface for resolution
- NameResolver / ResolutionStore: Resolver and the store it reads through
- NameResolution / ResolutionSource: Result and its branch tag
"""

from .interfaces import IResolutionService
from .models import (
    ResolutionSource,
    ASSIGNED_SOURCES,
    ResolutionRequest,
    ResolutionMetadata,
    NameResolution,
    BatchResolveRequest,
    BatchResolveResponse,
)
from .resolver import NameResolver, ResolutionStore, PROPERTY_PRIORITY, decide
from .exceptions import UserNotFoundError

__all__ = [
    # Interface
    "IResolutionService",
    # Models
    "ResolutionSource",
    "ASSIGNED_SOURCES",
    "ResolutionRequest",
    "ResolutionMetadata",
    "NameResolution",
    "BatchResolveRequest",
    "BatchResolveResponse",
    # Resolver
    "NameResolver",
    "ResolutionStore",
    "PROPERTY_PRIORITY",
    "decide",
    # Exceptions
    "UserNotFoundError",
]
