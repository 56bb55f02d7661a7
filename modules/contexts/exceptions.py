"""
Contexts module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError, AuthorizationError


class ContextNotFoundError(NotFoundError):
    """Raised when a context does not exist or belongs to another user."""

    def __init__(self, context_id: str):
        super().__init__(
            f"Context not found: {context_id}",
            code="CONTEXT_NOT_FOUND",
            details={"context_id": context_id},
        )


class ContextNameTakenError(ConflictError):
    """Raised when the user already has a context with this name."""

    def __init__(self, context_name: str):
        super().__init__(
            f"A context named '{context_name}' already exists",
            code="CONTEXT_NAME_TAKEN",
            details={"context_name": context_name},
        )


class PermanentContextError(AuthorizationError):
    """Raised when an operation would delete or rename the permanent context."""

    def __init__(self, context_id: str, action: str):
        super().__init__(
            f"The default context cannot be {action}",
            code="PERMANENT_CONTEXT",
            details={"context_id": context_id, "action": action},
        )


class ContextHasAssignmentsError(ConflictError):
    """Raised when deleting a context that still has assignments without force."""

    def __init__(self, context_id: str, assignment_count: int):
        super().__init__(
            f"Context has {assignment_count} assignment(s); pass force=true to delete them too",
            code="CONTEXT_HAS_ASSIGNMENTS",
            details={"context_id": context_id, "assignment_count": assignment_count},
        )
