"""
OAuth module exceptions.
"""

from shared.exceptions import AuthenticationError, NotFoundError, ValidationError


class InvalidSessionTokenError(AuthenticationError):
    """Raised when a session token is unknown or expired."""

    def __init__(self):
        super().__init__(
            "Invalid or expired session token",
            code="INVALID_TOKEN",
        )


class ClientNotRegisteredError(NotFoundError):
    """Raised when a client_id is not in the client registry."""

    def __init__(self, client_id: str):
        super().__init__(
            f"OAuth client not registered: {client_id}",
            code="CLIENT_NOT_FOUND",
            details={"client_id": client_id},
        )


class NoContextAssignedError(ValidationError):
    """Raised when the user has not chosen a context for the application."""

    def __init__(self, client_id: str):
        super().__init__(
            f"No context assigned for application {client_id}",
            code="NO_CONTEXT_ASSIGNED",
            details={"client_id": client_id},
        )
