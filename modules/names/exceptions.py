"""
Names module exceptions.
"""

from shared.exceptions import NotFoundError, ConflictError


class NameNotFoundError(NotFoundError):
    """Raised when a name does not exist or belongs to another user."""

    def __init__(self, name_id: str):
        super().__init__(
            f"Name not found: {name_id}",
            code="NAME_NOT_FOUND",
            details={"name_id": name_id},
        )


class NameDeletionBlockedError(ConflictError):
    """Raised when a name is protected from deletion."""

    def __init__(self, name_id: str, reason_code: str, reason: str):
        super().__init__(
            reason,
            code="NAME_DELETION_BLOCKED",
            details={"name_id": name_id, "reason_code": reason_code},
        )
