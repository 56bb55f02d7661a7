"""
Assignments service implementation.

Single-row CRUD plus the two bulk paths (context assignments and the OIDC
properties of one context). Bulk saves fetch the current rows once, let
reconcile() classify the submission, then apply the writes row by row.
A store failure on one row is logged and skipped; the returned counts only
include rows that were actually written. Reading the final state back is
required, and a failure there is surfaced.
"""

import logging
from typing import Iterable, Optional, TYPE_CHECKING

from shared.config import get_settings
from shared.exceptions import DatabaseError
from shared.models import OIDCProperty, REQUIRED_OIDC_PROPERTIES
from modules.contexts.exceptions import ContextNotFoundError

from .interfaces import IAssignmentService
from .models import (
    Assignment,
    AssignmentTarget,
    AssignmentListResponse,
    AssignmentOperationResponse,
    BulkAssignmentResponse,
    ContextSummary,
    CreateAssignmentRequest,
    DeleteAssignmentResponse,
    OIDCAssignmentListResponse,
    OIDCAssignmentRequest,
    OIDCBatchRequest,
    OIDCBatchResponse,
    OperationKind,
    ReconciliationSummary,
    UpdateAssignmentRequest,
    BulkAssignmentEntry,
)
from .exceptions import (
    AssignmentNotFoundError,
    AssignmentOwnershipError,
    AssignmentStateReadError,
    BatchLimitExceededError,
    DuplicateAssignmentTargetError,
    RequiredPropertyRemovalError,
)
from .reconciler import ChangeKind, ReconciliationPlan, current_state, reconcile
from .repository import AssignmentRepository

if TYPE_CHECKING:
    from modules.contexts.models import Context
    from modules.contexts.repository import ContextRepository
    from modules.names.repository import NameRepository

logger = logging.getLogger(__name__)


def check_required_removals(
    permanent_context_ids: Iterable[str],
    removals: Iterable[tuple[str, Optional[OIDCProperty]]],
) -> None:
    """
    Refuse removals that would strip a required OIDC property from a
    permanent context.

    Each removal is a (context_id, oidc_property) key being deleted or moved
    away from its context.
    """
    permanent = set(permanent_context_ids)
    blocked: dict[str, list[str]] = {}
    for context_id, oidc_property in removals:
        if context_id in permanent and oidc_property in REQUIRED_OIDC_PROPERTIES:
            blocked.setdefault(context_id, []).append(oidc_property.value)
    for context_id, properties in blocked.items():
        raise RequiredPropertyRemovalError(properties, context_id)


class AssignmentService(IAssignmentService):
    """Assignment service backed by Supabase repositories."""

    def __init__(
        self,
        repository: AssignmentRepository,
        contexts: "ContextRepository",
        names: "NameRepository",
    ):
        self._repo = repository
        self._contexts = contexts
        self._names = names

    # -------------------------------------------------------------------------
    # Context assignments
    # -------------------------------------------------------------------------

    async def list_assignments(self, user_id: str) -> AssignmentListResponse:
        contexts = self._contexts.list_contexts(user_id)
        assignments = self._repo.find_assignments(user_id, generic_only=True)
        assigned_ids = {a.context_id for a in assignments}
        unassigned = [
            ContextSummary(id=c.id, context_name=c.context_name, description=c.description)
            for c in contexts
            if c.id not in assigned_ids
        ]
        return AssignmentListResponse(
            assignments=assignments,
            unassigned_contexts=unassigned,
            total_contexts=len(contexts),
            assigned_contexts=len(assigned_ids),
        )

    async def create_assignment(self, user_id: str, request: CreateAssignmentRequest) -> AssignmentOperationResponse:
        self._require_owned(user_id, [request.context_id], [request.name_id])
        return self._upsert_one(user_id, request.context_id, request.name_id, request.oidc_property)

    async def update_assignment(
        self,
        user_id: str,
        assignment_id: str,
        request: UpdateAssignmentRequest,
    ) -> Assignment:
        existing = self._repo.get_assignment(user_id, assignment_id)
        if existing is None:
            raise AssignmentNotFoundError(assignment_id)

        context_id = request.context_id or existing.context_id
        name_id = request.name_id or existing.name_id
        self._require_owned(user_id, [context_id], [name_id])

        if context_id != existing.context_id:
            if existing.context_is_permanent:
                check_required_removals([existing.context_id], [existing.key])
            clash = self._repo.find_assignments(
                user_id,
                context_id=context_id,
                oidc_property=existing.oidc_property,
                generic_only=existing.oidc_property is None,
            )
            if any(a.id != assignment_id for a in clash):
                raise DuplicateAssignmentTargetError([(context_id, existing.oidc_property)])

        updated = self._repo.update_assignment(
            user_id,
            assignment_id,
            {"context_id": context_id, "name_id": name_id},
        )
        if updated is None:
            raise AssignmentNotFoundError(assignment_id)
        return updated

    async def delete_assignment(self, user_id: str, assignment_id: str) -> DeleteAssignmentResponse:
        existing = self._repo.get_assignment(user_id, assignment_id)
        if existing is None:
            raise AssignmentNotFoundError(assignment_id)
        if existing.context_is_permanent:
            check_required_removals([existing.context_id], [existing.key])

        deleted = self._repo.delete_assignment_by_id(user_id, assignment_id)
        return DeleteAssignmentResponse(deleted=deleted, assignment_id=assignment_id)

    async def bulk_assign(self, user_id: str, entries: list[BulkAssignmentEntry]) -> BulkAssignmentResponse:
        limit = get_settings().bulk_assignment_limit
        if len(entries) > limit:
            raise BatchLimitExceededError(len(entries), limit)

        targets = [AssignmentTarget(**e.model_dump()) for e in entries]
        context_ids = [t.context_id for t in targets]
        _, summary = self._reconcile_and_apply(user_id, targets)
        assignments = self._read_back(user_id, context_ids, "bulk_assign")

        return BulkAssignmentResponse(
            created=summary.created,
            updated=summary.updated,
            deleted=summary.deleted,
            unchanged=summary.unchanged,
            failed=summary.failed,
            assignments=assignments,
        )

    # -------------------------------------------------------------------------
    # OIDC property assignments
    # -------------------------------------------------------------------------

    async def list_oidc_assignments(self, user_id: str, context_id: str) -> OIDCAssignmentListResponse:
        context = self._require_context(user_id, context_id)
        assignments = [
            a for a in self._repo.find_assignments(user_id, context_id=context_id)
            if a.oidc_property is not None
        ]
        return OIDCAssignmentListResponse(
            context_id=context.id,
            context_name=context.context_name,
            assignments=assignments,
            total=len(assignments),
        )

    async def assign_oidc(self, user_id: str, request: OIDCAssignmentRequest) -> AssignmentOperationResponse:
        self._require_owned(user_id, [request.context_id], [request.name_id])
        return self._upsert_one(user_id, request.context_id, request.name_id, request.oidc_property)

    async def unassign_oidc(
        self,
        user_id: str,
        context_id: str,
        oidc_property: OIDCProperty,
    ) -> DeleteAssignmentResponse:
        context = self._require_context(user_id, context_id)
        if context.is_permanent:
            check_required_removals([context.id], [(context.id, oidc_property)])

        deleted = self._repo.delete_assignment(user_id, context_id, oidc_property)
        return DeleteAssignmentResponse(deleted=deleted)

    async def batch_oidc(self, user_id: str, request: OIDCBatchRequest) -> OIDCBatchResponse:
        limit = get_settings().oidc_batch_limit
        if len(request.assignments) > limit:
            raise BatchLimitExceededError(len(request.assignments), limit)

        context = self._require_context(user_id, request.context_id)
        targets = [
            AssignmentTarget(context_id=context.id, name_id=e.name_id, oidc_property=e.oidc_property)
            for e in request.assignments
        ]

        if context.is_permanent:
            check_required_removals([context.id], [t.key for t in targets if t.name_id is None])

        _, summary = self._reconcile_and_apply(user_id, targets)
        assignments = [
            a for a in self._read_back(user_id, [context.id], "batch_oidc")
            if a.oidc_property is not None
        ]
        return OIDCBatchResponse(
            context_id=context.id,
            context_name=context.context_name,
            assignments=assignments,
            summary=summary,
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_context(self, user_id: str, context_id: str) -> "Context":
        context = self._contexts.get_context(user_id, context_id)
        if context is None:
            raise ContextNotFoundError(context_id)
        return context

    def _require_owned(self, user_id: str, context_ids: list[str], name_ids: list[str]) -> None:
        owned_contexts = {c.id for c in self._contexts.find_contexts_by_ids(user_id, context_ids)}
        owned_names = {n.id for n in self._names.find_names_by_ids(user_id, name_ids)}
        foreign_contexts = [c for c in dict.fromkeys(context_ids) if c not in owned_contexts]
        foreign_names = [n for n in dict.fromkeys(name_ids) if n not in owned_names]
        if foreign_contexts or foreign_names:
            raise AssignmentOwnershipError(foreign_contexts, foreign_names)

    def _upsert_one(
        self,
        user_id: str,
        context_id: str,
        name_id: str,
        oidc_property: Optional[OIDCProperty],
    ) -> AssignmentOperationResponse:
        existing = self._repo.find_assignments(
            user_id,
            context_id=context_id,
            oidc_property=oidc_property,
            generic_only=oidc_property is None,
        )
        assignment = self._repo.upsert_assignment(user_id, context_id, name_id, oidc_property)
        operation = OperationKind.UPDATED if existing else OperationKind.CREATED
        return AssignmentOperationResponse(assignment=assignment, operation=operation)

    def _reconcile_and_apply(
        self,
        user_id: str,
        targets: list[AssignmentTarget],
    ) -> tuple[ReconciliationPlan, ReconciliationSummary]:
        context_ids = list(dict.fromkeys(t.context_id for t in targets))
        name_ids = list(dict.fromkeys(t.name_id for t in targets if t.name_id is not None))

        contexts = self._contexts.find_contexts_by_ids(user_id, context_ids)
        owned_names = [n.id for n in self._names.find_names_by_ids(user_id, name_ids)]
        current = current_state(self._repo.find_assignments(user_id, context_ids=context_ids))

        plan = reconcile(
            current,
            targets,
            owned_context_ids=[c.id for c in contexts],
            owned_name_ids=owned_names,
        )
        check_required_removals(
            [c.id for c in contexts if c.is_permanent],
            [change.key for change in plan.to_delete],
        )
        summary = self.apply_plan(user_id, plan)
        logger.info(
            f"Reconciled {summary.total_processed} assignment(s) for user {user_id}: "
            f"{summary.created} created, {summary.updated} updated, {summary.deleted} deleted, "
            f"{summary.unchanged} unchanged, {summary.failed} failed"
        )
        return plan, summary

    def apply_plan(self, user_id: str, plan: ReconciliationPlan) -> ReconciliationSummary:
        """
        Apply a reconciliation plan row by row.

        Deletes run first so a batch can move a name between keys. A
        DatabaseError on one row is logged and counted as failed.
        """
        summary = ReconciliationSummary(total_processed=plan.total, unchanged=len(plan.unchanged))

        for change in plan.writes:
            logger.debug(f"Applying {change.kind.value} for {change.key} -> {change.name_id}")
            try:
                if change.kind is ChangeKind.DELETE:
                    self._repo.delete_assignment(user_id, change.context_id, change.oidc_property)
                    summary.deleted += 1
                else:
                    self._repo.upsert_assignment(user_id, change.context_id, change.name_id, change.oidc_property)
                    if change.kind is ChangeKind.CREATE:
                        summary.created += 1
                    else:
                        summary.updated += 1
            except DatabaseError as e:
                summary.failed += 1
                logger.warning(f"Skipping {change.kind.value} for {change.key}: {e.message}")

        return summary

    def _read_back(self, user_id: str, context_ids: list[str], operation: str) -> list[Assignment]:
        try:
            return self._repo.find_assignments(user_id, context_ids=context_ids)
        except DatabaseError as e:
            logger.error(f"Could not read assignments after {operation} for user {user_id}: {e.message}")
            raise AssignmentStateReadError(operation, e.message) from e
