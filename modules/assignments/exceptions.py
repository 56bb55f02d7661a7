"""
Assignments module exceptions.
"""

from typing import Optional

from shared.exceptions import ConflictError, InternalError, NotFoundError, ValidationError


def _format_key(key) -> str:
    context_id, prop = key
    prop = getattr(prop, "value", prop)
    return f"{context_id}:{prop}" if prop else context_id


class AssignmentNotFoundError(NotFoundError):
    """Raised when an assignment does not exist or belongs to another user."""

    def __init__(self, assignment_id: str):
        super().__init__(
            f"Assignment not found: {assignment_id}",
            code="ASSIGNMENT_NOT_FOUND",
            details={"assignment_id": assignment_id},
        )


class DuplicateAssignmentTargetError(ConflictError):
    """Raised when a batch submits the same (context, property) key twice."""

    def __init__(self, keys: list):
        formatted = [_format_key(k) for k in keys]
        super().__init__(
            f"Duplicate assignment targets in request: {', '.join(formatted)}",
            code="DUPLICATE_ASSIGNMENT_TARGET",
            details={"keys": formatted},
        )


class AssignmentOwnershipError(ValidationError):
    """Raised when a batch references contexts or names the user does not own."""

    def __init__(self, context_ids: list[str], name_ids: list[str]):
        super().__init__(
            "One or more contexts or names do not belong to the user",
            code="INVALID_OWNERSHIP",
            details={"context_ids": context_ids, "name_ids": name_ids},
        )


class BatchLimitExceededError(ValidationError):
    """Raised when a batch is larger than the configured limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Batch of {size} entries exceeds the limit of {limit}",
            code="BATCH_LIMIT_EXCEEDED",
            details={"size": size, "limit": limit},
        )


class RequiredPropertyRemovalError(ValidationError):
    """Raised when required OIDC properties would be removed from the permanent context."""

    def __init__(self, properties: list[str], context_id: Optional[str] = None):
        super().__init__(
            f"Cannot remove required properties from the default context: {', '.join(properties)}",
            code="REQUIRED_PROPERTY_REMOVAL",
            details={"properties": properties, "context_id": context_id},
        )


class AssignmentStateReadError(InternalError):
    """Raised when the post-write state of a batch cannot be read back."""

    def __init__(self, operation: str, message: str):
        super().__init__(
            f"Failed to read assignments after {operation}: {message}",
            code="ASSIGNMENT_STATE_READ_FAILED",
            details={"operation": operation},
        )
