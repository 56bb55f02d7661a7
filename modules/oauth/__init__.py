"""
OAuth module.

Resolves OIDC claims for client applications holding a session token,
and manages which context each application sees.

Public API:
- IOAuthService: Interface for OAuth operations
- OAuthResolveResponse: Disclosed name, source and claims
"""

from .interfaces import IOAuthService
from .models import (
    OAuthClient,
    OAuthSession,
    AppContextAssignment,
    OAuthResolveResponse,
    UpdateAppAssignmentRequest,
    AppAssignmentResponse,
)
from .exceptions import InvalidSessionTokenError, ClientNotRegisteredError, NoContextAssignedError

__all__ = [
    # Interface
    "IOAuthService",
    # Models
    "OAuthClient",
    "OAuthSession",
    "AppContextAssignment",
    "OAuthResolveResponse",
    "UpdateAppAssignmentRequest",
    "AppAssignmentResponse",
    # Exceptions
    "InvalidSessionTokenError",
    "ClientNotRegisteredError",
    "NoContextAssignedError",
]
