"""
Contexts service implementation.
"""

import logging
from collections import Counter
from typing import Optional, TYPE_CHECKING

from shared.exceptions import DatabaseError
from shared.models import REQUIRED_OIDC_PROPERTIES

from .interfaces import IContextService
from .models import (
    Context,
    ContextWithStats,
    ContextListResponse,
    CreateContextRequest,
    UpdateContextRequest,
    ContextCompleteness,
    ContextDeletionCheck,
    DeleteContextResponse,
    DeletionImpact,
)
from .exceptions import (
    ContextNotFoundError,
    ContextNameTakenError,
    PermanentContextError,
    ContextHasAssignmentsError,
)
from .repository import ContextRepository

if TYPE_CHECKING:
    from modules.assignments.repository import AssignmentRepository

logger = logging.getLogger(__name__)

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


class ContextService(IContextService):
    """Context service backed by Supabase repositories."""

    def __init__(
        self,
        repository: ContextRepository,
        assignments: "AssignmentRepository",
    ):
        self._repo = repository
        self._assignments = assignments

    async def list_contexts(self, user_id: str) -> ContextListResponse:
        contexts = self._repo.list_contexts(user_id)
        counts = Counter(a.context_id for a in self._assignments.find_assignments(user_id))
        items = [
            ContextWithStats(**c.model_dump(), assignment_count=counts.get(c.id, 0))
            for c in contexts
        ]
        return ContextListResponse(contexts=items, total=len(items))

    async def create_context(self, user_id: str, request: CreateContextRequest) -> Context:
        self._ensure_name_available(user_id, request.context_name)
        try:
            context = self._repo.create_context(user_id, request.model_dump(exclude_none=True))
        except DatabaseError as e:
            if e.details.get("db_code") == UNIQUE_VIOLATION:
                raise ContextNameTakenError(request.context_name) from e
            raise
        logger.info(f"Created context {context.id} ({context.context_name}) for user {user_id}")
        return context

    async def update_context(self, user_id: str, context_id: str, request: UpdateContextRequest) -> Context:
        existing = self._get_owned(user_id, context_id)

        data = request.model_dump(exclude_none=True)
        new_name = data.get("context_name")
        if new_name is not None and new_name != existing.context_name:
            if existing.is_permanent:
                raise PermanentContextError(context_id, "renamed")
            self._ensure_name_available(user_id, new_name, exclude_id=context_id)

        try:
            updated = self._repo.update_context(user_id, context_id, data)
        except DatabaseError as e:
            if new_name is not None and e.details.get("db_code") == UNIQUE_VIOLATION:
                raise ContextNameTakenError(new_name) from e
            raise
        if updated is None:
            raise ContextNotFoundError(context_id)
        return updated

    async def check_deletion(self, user_id: str, context_id: str) -> ContextDeletionCheck:
        context = self._get_owned(user_id, context_id)
        assignments = self._assignments.find_assignments(user_id, context_id=context_id)
        impact = DeletionImpact(
            assignment_count=len(assignments),
            affected_properties=sorted({a.oidc_property.value for a in assignments if a.oidc_property}),
        )

        if context.is_permanent:
            return ContextDeletionCheck(
                context_id=context_id,
                context_name=context.context_name,
                can_delete=False,
                requires_force=False,
                reason="The default context cannot be deleted",
                impact=impact,
            )

        return ContextDeletionCheck(
            context_id=context_id,
            context_name=context.context_name,
            can_delete=True,
            requires_force=impact.assignment_count > 0,
            reason=None,
            impact=impact,
        )

    async def check_completeness(self, user_id: str, context_id: str) -> ContextCompleteness:
        context = self._get_owned(user_id, context_id)
        assignments = self._assignments.find_assignments(user_id, context_id=context_id)

        required = sorted(p.value for p in REQUIRED_OIDC_PROPERTIES)
        assigned = sorted({a.oidc_property.value for a in assignments if a.oidc_property})
        missing = [p for p in required if p not in assigned]
        return ContextCompleteness(
            context_id=context.id,
            context_name=context.context_name,
            is_complete=not missing,
            required_properties=required,
            assigned_properties=assigned,
            missing_properties=missing,
            assignment_count=len(assignments),
            completion_percentage=round((len(required) - len(missing)) / len(required) * 100, 2),
        )

    async def delete_context(self, user_id: str, context_id: str, force: bool = False) -> DeleteContextResponse:
        check = await self.check_deletion(user_id, context_id)
        if not check.can_delete:
            raise PermanentContextError(context_id, "deleted")
        if check.requires_force and not force:
            raise ContextHasAssignmentsError(context_id, check.impact.assignment_count)

        removed = 0
        if check.requires_force:
            for assignment in self._assignments.find_assignments(user_id, context_id=context_id):
                if self._assignments.delete_assignment_by_id(user_id, assignment.id):
                    removed += 1

        if not self._repo.delete_context(user_id, context_id):
            raise ContextNotFoundError(context_id)

        logger.info(f"Deleted context {context_id} for user {user_id} ({removed} assignments removed)")
        return DeleteContextResponse(deleted=True, context_id=context_id, removed_assignments=removed)

    def _get_owned(self, user_id: str, context_id: str) -> Context:
        context = self._repo.get_context(user_id, context_id)
        if context is None:
            raise ContextNotFoundError(context_id)
        return context

    def _ensure_name_available(self, user_id: str, context_name: str, exclude_id: Optional[str] = None) -> None:
        existing = self._repo.find_context_by_name(user_id, context_name)
        if existing is not None and existing.id != exclude_id:
            raise ContextNameTakenError(context_name)
