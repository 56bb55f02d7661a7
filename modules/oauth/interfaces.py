"""
OAuth module interface.
"""

from typing import Protocol, runtime_checkable

from .models import OAuthResolveResponse, AppAssignmentResponse, ConnectedAppsResponse


@runtime_checkable
class IOAuthService(Protocol):
    """Interface for session-token name resolution and app context choices."""

    async def resolve_session(self, session_token: str) -> OAuthResolveResponse:
        """
        Build OIDC claims for the user and client behind a session token.

        Raises:
            InvalidSessionTokenError: If the token is unknown or expired
            ClientNotRegisteredError: If the session's client is not registered
            NoContextAssignedError: If the user chose no context for the client
        """
        ...

    async def get_app_assignment(self, user_id: str, client_id: str) -> AppAssignmentResponse:
        """Return the context the user presents to a client application."""
        ...

    async def update_app_assignment(self, user_id: str, client_id: str, context_id: str) -> AppAssignmentResponse:
        """
        Choose which context to present to a client application.

        Raises:
            ClientNotRegisteredError: If the client is not registered
            ContextNotFoundError: If the context isn't owned by the user
        """
        ...

    async def list_connected_apps(self, user_id: str) -> ConnectedAppsResponse:
        """
        List the applications the user has chosen a context for.

        Assignments whose client is no longer registered are left out.
        """
        ...
