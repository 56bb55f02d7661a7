"""
Assignment reconciliation.

Pure decision logic for bulk saves: given the current bindings and a
submitted target list, classify every submitted entry as a create, update,
delete or no-op. Nothing here touches the store; the service fetches the
current state, calls reconcile(), then applies the plan.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional

from shared.models import OIDCProperty

from .exceptions import AssignmentOwnershipError, DuplicateAssignmentTargetError
from .models import Assignment, AssignmentKey, AssignmentTarget

CurrentState = Mapping[AssignmentKey, Optional[str]]


class ChangeKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class PlannedChange:
    """One classified entry of a submission."""

    kind: ChangeKind
    context_id: str
    oidc_property: Optional[OIDCProperty]
    name_id: Optional[str]
    previous_name_id: Optional[str] = None

    @property
    def key(self) -> AssignmentKey:
        return (self.context_id, self.oidc_property)


@dataclass
class ReconciliationPlan:
    """Result of reconcile(). Every submitted entry lands in exactly one list."""

    to_create: list[PlannedChange] = field(default_factory=list)
    to_update: list[PlannedChange] = field(default_factory=list)
    to_delete: list[PlannedChange] = field(default_factory=list)
    unchanged: list[PlannedChange] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.to_create) + len(self.to_update) + len(self.to_delete) + len(self.unchanged)

    @property
    def writes(self) -> list[PlannedChange]:
        """Deletes first, then creates and updates."""
        return [*self.to_delete, *self.to_create, *self.to_update]

    def add(self, change: PlannedChange) -> None:
        bucket = {
            ChangeKind.CREATE: self.to_create,
            ChangeKind.UPDATE: self.to_update,
            ChangeKind.DELETE: self.to_delete,
            ChangeKind.UNCHANGED: self.unchanged,
        }[change.kind]
        bucket.append(change)


def current_state(assignments: Iterable[Assignment]) -> dict[AssignmentKey, str]:
    """Index stored assignments by their (context_id, oidc_property) key."""
    return {a.key: a.name_id for a in assignments}


def check_duplicate_targets(submitted: Iterable[AssignmentTarget]) -> None:
    """Reject a batch that names the same key more than once."""
    seen: set[AssignmentKey] = set()
    duplicates: list[AssignmentKey] = []
    for target in submitted:
        if target.key in seen and target.key not in duplicates:
            duplicates.append(target.key)
        seen.add(target.key)
    if duplicates:
        raise DuplicateAssignmentTargetError(duplicates)


def check_ownership(
    submitted: Iterable[AssignmentTarget],
    owned_context_ids: Iterable[str],
    owned_name_ids: Iterable[str],
) -> None:
    """Reject a batch that references any context or name the user does not own."""
    owned_contexts = set(owned_context_ids)
    owned_names = set(owned_name_ids)
    foreign_contexts: list[str] = []
    foreign_names: list[str] = []
    for target in submitted:
        if target.context_id not in owned_contexts and target.context_id not in foreign_contexts:
            foreign_contexts.append(target.context_id)
        if target.name_id is not None and target.name_id not in owned_names and target.name_id not in foreign_names:
            foreign_names.append(target.name_id)
    if foreign_contexts or foreign_names:
        raise AssignmentOwnershipError(foreign_contexts, foreign_names)


def classify(target: AssignmentTarget, current: CurrentState) -> PlannedChange:
    """Decide what one submitted entry needs relative to the current state."""
    existing = current.get(target.key)
    prop = target.oidc_property

    if target.name_id is None:
        kind = ChangeKind.DELETE if existing is not None else ChangeKind.UNCHANGED
    elif existing is None:
        kind = ChangeKind.CREATE
    elif existing == target.name_id:
        kind = ChangeKind.UNCHANGED
    else:
        kind = ChangeKind.UPDATE

    return PlannedChange(
        kind=kind,
        context_id=target.context_id,
        oidc_property=prop,
        name_id=target.name_id,
        previous_name_id=existing,
    )


def reconcile(
    current: CurrentState,
    submitted: list[AssignmentTarget],
    *,
    owned_context_ids: Optional[Iterable[str]] = None,
    owned_name_ids: Optional[Iterable[str]] = None,
) -> ReconciliationPlan:
    """
    Compute the minimal set of writes that moves `current` to `submitted`.

    Args:
        current: Existing bindings, (context_id, oidc_property) -> name_id
        submitted: Target entries; a null name_id means "remove the binding"
        owned_context_ids: When given, every referenced context must be in it
        owned_name_ids: When given, every referenced name must be in it

    Returns:
        ReconciliationPlan partitioning the submission

    Raises:
        DuplicateAssignmentTargetError: A key appears twice in the submission
        AssignmentOwnershipError: A referenced id is not owned by the user
    """
    check_duplicate_targets(submitted)
    if owned_context_ids is not None or owned_name_ids is not None:
        check_ownership(submitted, owned_context_ids or (), owned_name_ids or ())

    plan = ReconciliationPlan()
    for target in submitted:
        plan.add(classify(target, current))
    return plan


def apply_plan_to_state(current: CurrentState, plan: ReconciliationPlan) -> dict[AssignmentKey, str]:
    """The state a fully successful application of `plan` would leave behind."""
    state = {k: v for k, v in current.items() if v is not None}
    for change in plan.to_delete:
        state.pop(change.key, None)
    for change in [*plan.to_create, *plan.to_update]:
        state[change.key] = change.name_id
    return state
