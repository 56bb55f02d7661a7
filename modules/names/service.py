"""
Names service implementation.

Owns the preferred-name rule (at most one per user) and the deletion
protection rules. Storage goes through NameRepository; assignment lookups
for protection go through AssignmentRepository.
"""

import logging
from typing import TYPE_CHECKING

from .interfaces import INameService
from .models import (
    Name,
    NameListResponse,
    CreateNameRequest,
    UpdateNameRequest,
    NameDeletionCheck,
    NameAssignmentsResponse,
    NameContextAssignment,
    DeletionReason,
)
from .exceptions import NameNotFoundError, NameDeletionBlockedError
from .repository import NameRepository

if TYPE_CHECKING:
    from modules.assignments.repository import AssignmentRepository

logger = logging.getLogger(__name__)

DELETION_MESSAGES = {
    DeletionReason.DELETION_ALLOWED: "Name can be deleted",
    DeletionReason.LAST_NAME_PROTECTION: "Cannot delete your last remaining name",
    DeletionReason.PERMANENT_CONTEXT_ASSIGNED: "Name is assigned in your default context; assign another name there first",
    DeletionReason.CONTEXT_ASSIGNED: "Name is assigned to one or more contexts; remove those assignments first",
}


class NameService(INameService):
    """Name service backed by Supabase repositories."""

    def __init__(
        self,
        repository: NameRepository,
        assignments: "AssignmentRepository",
    ):
        self._repo = repository
        self._assignments = assignments

    async def list_names(self, user_id: str) -> NameListResponse:
        names = self._repo.list_names(user_id)
        preferred = next((n for n in names if n.is_preferred), None)
        return NameListResponse(
            names=names,
            total=len(names),
            preferred_name_id=preferred.id if preferred else None,
        )

    async def create_name(self, user_id: str, request: CreateNameRequest) -> Name:
        if request.is_preferred:
            self._repo.clear_preferred(user_id)

        name = self._repo.create_name(user_id, {
            "name_text": request.name_text,
            "category": request.category.value,
            "is_preferred": request.is_preferred,
            "source": request.source,
        })
        logger.info(f"Created name {name.id} for user {user_id}")
        return name

    async def update_name(self, user_id: str, name_id: str, request: UpdateNameRequest) -> Name:
        existing = self._repo.get_name(user_id, name_id)
        if existing is None:
            raise NameNotFoundError(name_id)

        data = request.model_dump(exclude_none=True)
        if "category" in data:
            data["category"] = request.category.value
        if request.is_preferred:
            self._repo.clear_preferred(user_id, except_name_id=name_id)

        updated = self._repo.update_name(user_id, name_id, data)
        if updated is None:
            raise NameNotFoundError(name_id)
        return updated

    async def list_name_assignments(self, user_id: str, name_id: str) -> NameAssignmentsResponse:
        name = self._repo.get_name(user_id, name_id)
        if name is None:
            raise NameNotFoundError(name_id)

        assignments = [
            NameContextAssignment(
                assignment_id=a.id,
                context_id=a.context_id,
                context_name=a.context_name,
                is_permanent=a.context_is_permanent,
                oidc_property=a.oidc_property,
            )
            for a in self._assignments.find_assignments(user_id, name_id=name_id)
        ]
        return NameAssignmentsResponse(
            name_id=name.id,
            name_text=name.name_text,
            assignments=assignments,
            total=len(assignments),
        )

    async def check_deletion(self, user_id: str, name_id: str) -> NameDeletionCheck:
        if self._repo.get_name(user_id, name_id) is None:
            raise NameNotFoundError(name_id)

        assignments = self._assignments.find_assignments(user_id, name_id=name_id)

        if self._repo.count_names(user_id) <= 1:
            reason = DeletionReason.LAST_NAME_PROTECTION
        elif any(a.context_is_permanent for a in assignments):
            reason = DeletionReason.PERMANENT_CONTEXT_ASSIGNED
        elif assignments:
            reason = DeletionReason.CONTEXT_ASSIGNED
        else:
            reason = DeletionReason.DELETION_ALLOWED

        return NameDeletionCheck(
            name_id=name_id,
            can_delete=reason is DeletionReason.DELETION_ALLOWED,
            reason_code=reason,
            reason=DELETION_MESSAGES[reason],
            assignment_count=len(assignments),
        )

    async def delete_name(self, user_id: str, name_id: str) -> bool:
        check = await self.check_deletion(user_id, name_id)
        if not check.can_delete:
            raise NameDeletionBlockedError(name_id, check.reason_code.value, check.reason)

        deleted = self._repo.delete_name(user_id, name_id)
        if not deleted:
            raise NameNotFoundError(name_id)
        logger.info(f"Deleted name {name_id} for user {user_id}")
        return True
