"""
Shared infrastructure for the TrueNamePath backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- repository: Base repository with error translation
- models: Authenticated user and OIDC property vocabulary

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, is_database_configured, reset_client_cache
from .exceptions import (
    TrueNameError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    InternalError,
    ExternalServiceError,
    DatabaseError,
)
from .models import AuthenticatedUser, OIDCProperty, REQUIRED_OIDC_PROPERTIES

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "is_database_configured",
    "reset_client_cache",
    "TrueNameError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "InternalError",
    "ExternalServiceError",
    "DatabaseError",
    "AuthenticatedUser",
    "OIDCProperty",
    "REQUIRED_OIDC_PROPERTIES",
]
