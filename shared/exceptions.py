"""
Base exception classes for the TrueNamePath backend.

Each module should define its own exceptions that inherit from these bases.
The API error handlers map each base class to one HTTP status code, so a
module exception only has to pick the right parent.
"""

from typing import Optional, Any


class TrueNameError(Exception):
    """
    Base exception for all TrueNamePath errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(TrueNameError):
    """Resource not found, or not owned by the caller."""

    pass


class ValidationError(TrueNameError):
    """Input validation failed."""

    pass


class ConflictError(TrueNameError):
    """Request conflicts with existing state (duplicate target, uniqueness)."""

    pass


class AuthenticationError(TrueNameError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(TrueNameError):
    """Authorization failed (insufficient permissions)."""

    pass


class InternalError(TrueNameError):
    """Unexpected failure inside the service."""

    pass


class ExternalServiceError(TrueNameError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class DatabaseError(ExternalServiceError):
    """A store query or write failed."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            f"Database operation failed ({operation}): {message}",
            service="supabase",
            code="DATABASE_ERROR",
            details=details,
        )
        self.operation = operation
        self.details["operation"] = operation
