"""
Contexts module interface.
"""

from typing import Protocol, runtime_checkable

from .models import (
    Context,
    ContextListResponse,
    CreateContextRequest,
    UpdateContextRequest,
    ContextCompleteness,
    ContextDeletionCheck,
    DeleteContextResponse,
)


@runtime_checkable
class IContextService(Protocol):
    """Interface for context management."""

    async def list_contexts(self, user_id: str) -> ContextListResponse:
        """List the user's contexts with their assignment counts."""
        ...

    async def create_context(self, user_id: str, request: CreateContextRequest) -> Context:
        """
        Create a context.

        Raises:
            ContextNameTakenError: If the user already has a context with this name
        """
        ...

    async def update_context(self, user_id: str, context_id: str, request: UpdateContextRequest) -> Context:
        """
        Rename or re-describe a context.

        Raises:
            ContextNotFoundError: If the context doesn't exist or isn't owned
            PermanentContextError: If renaming the permanent context
            ContextNameTakenError: If the new name is already used
        """
        ...

    async def check_deletion(self, user_id: str, context_id: str) -> ContextDeletionCheck:
        """Report whether and how a context can be deleted."""
        ...

    async def check_completeness(self, user_id: str, context_id: str) -> ContextCompleteness:
        """
        Report which of the required OIDC properties the context binds.

        Raises:
            ContextNotFoundError: If the context doesn't exist or isn't owned
        """
        ...

    async def delete_context(self, user_id: str, context_id: str, force: bool = False) -> DeleteContextResponse:
        """
        Delete a context.

        With force, the context's assignments are removed first.

        Raises:
            ContextNotFoundError: If the context doesn't exist or isn't owned
            PermanentContextError: If deleting the permanent context
            ContextHasAssignmentsError: If assignments exist and force is not set
        """
        ...
