"""
Names module interface.

The API layer depends on INameService for all name operations.
"""

from typing import Protocol, runtime_checkable

from .models import (
    Name,
    NameListResponse,
    CreateNameRequest,
    UpdateNameRequest,
    NameDeletionCheck,
    NameAssignmentsResponse,
)


@runtime_checkable
class INameService(Protocol):
    """Interface for name variant management."""

    async def list_names(self, user_id: str) -> NameListResponse:
        """List all of the user's names, oldest first."""
        ...

    async def create_name(self, user_id: str, request: CreateNameRequest) -> Name:
        """
        Create a name.

        When the request marks it preferred, the user's other names lose
        their preferred flag first.
        """
        ...

    async def update_name(self, user_id: str, name_id: str, request: UpdateNameRequest) -> Name:
        """
        Update a name.

        Raises:
            NameNotFoundError: If the name doesn't exist or isn't owned
        """
        ...

    async def list_name_assignments(self, user_id: str, name_id: str) -> NameAssignmentsResponse:
        """
        List the contexts and OIDC properties a name is bound to.

        Raises:
            NameNotFoundError: If the name doesn't exist or isn't owned
        """
        ...

    async def check_deletion(self, user_id: str, name_id: str) -> NameDeletionCheck:
        """Report whether a name can be deleted, without deleting it."""
        ...

    async def delete_name(self, user_id: str, name_id: str) -> bool:
        """
        Delete a name.

        Raises:
            NameNotFoundError: If the name doesn't exist or isn't owned
            NameDeletionBlockedError: If the name is protected
        """
        ...
