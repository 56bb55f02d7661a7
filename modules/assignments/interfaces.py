"""
Assignments module interface.

The API layer depends on IAssignmentService for all assignment operations,
including the reconciling bulk saves.
"""

from typing import Protocol, runtime_checkable

from shared.models import OIDCProperty

from .models import (
    Assignment,
    AssignmentListResponse,
    AssignmentOperationResponse,
    BulkAssignmentEntry,
    BulkAssignmentResponse,
    CreateAssignmentRequest,
    DeleteAssignmentResponse,
    OIDCAssignmentListResponse,
    OIDCAssignmentRequest,
    OIDCBatchRequest,
    OIDCBatchResponse,
    UpdateAssignmentRequest,
)


@runtime_checkable
class IAssignmentService(Protocol):
    """
    Interface for context-name assignment operations.

    Every referenced context and name must belong to the calling user;
    a foreign id rejects the whole request before anything is written.
    """

    async def list_assignments(self, user_id: str) -> AssignmentListResponse:
        """List generic (non-OIDC) assignments and the contexts without one."""
        ...

    async def create_assignment(self, user_id: str, request: CreateAssignmentRequest) -> AssignmentOperationResponse:
        """
        Bind a name to a context, replacing any existing binding for the key.

        Returns:
            The stored assignment and whether it was CREATED or UPDATED
        """
        ...

    async def update_assignment(
        self,
        user_id: str,
        assignment_id: str,
        request: UpdateAssignmentRequest,
    ) -> Assignment:
        """
        Move an assignment to another context or name.

        Raises:
            AssignmentNotFoundError: If the assignment doesn't exist or isn't owned
            DuplicateAssignmentTargetError: If the destination key is taken
        """
        ...

    async def delete_assignment(self, user_id: str, assignment_id: str) -> DeleteAssignmentResponse:
        ...

    async def bulk_assign(self, user_id: str, entries: list[BulkAssignmentEntry]) -> BulkAssignmentResponse:
        """
        Save a target state for many keys at once.

        Entries with a null name_id remove the binding. Returns the counts of
        writes that succeeded and the resulting assignments.

        Raises:
            BatchLimitExceededError: If the batch is too large
            DuplicateAssignmentTargetError: If a key is submitted twice
            AssignmentOwnershipError: If any id is not owned by the user
            AssignmentStateReadError: If the final state cannot be read back
        """
        ...

    async def list_oidc_assignments(self, user_id: str, context_id: str) -> OIDCAssignmentListResponse:
        """List the OIDC property bindings of one context."""
        ...

    async def assign_oidc(self, user_id: str, request: OIDCAssignmentRequest) -> AssignmentOperationResponse:
        ...

    async def unassign_oidc(
        self,
        user_id: str,
        context_id: str,
        oidc_property: OIDCProperty,
    ) -> DeleteAssignmentResponse:
        """
        Remove one OIDC property binding.

        Raises:
            RequiredPropertyRemovalError: For given_name, family_name or name
                in the permanent context
        """
        ...

    async def batch_oidc(self, user_id: str, request: OIDCBatchRequest) -> OIDCBatchResponse:
        """Save a target state for the OIDC properties of one context."""
        ...
