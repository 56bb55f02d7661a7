"""
Assignments module data models.

An Assignment binds one of a user's names to one of their contexts,
optionally for a single OIDC property. The pair (context_id, oidc_property)
is unique per user; a null property is the context's generic binding.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from shared.models import OIDCProperty

# (context_id, oidc_property) - the uniqueness key of an assignment
AssignmentKey = tuple[str, Optional[OIDCProperty]]


def assignment_key(context_id: str, oidc_property: Optional[OIDCProperty] = None) -> AssignmentKey:
    return (context_id, oidc_property)


class Assignment(BaseModel):
    """A stored context-name binding, with joined context and name fields."""

    id: str = Field(..., description="Assignment ID (UUID)")
    user_id: str = Field(..., description="Owning user ID")
    context_id: str = Field(..., description="Bound context")
    name_id: str = Field(..., description="Bound name")
    oidc_property: Optional[OIDCProperty] = Field(None, description="OIDC property, or null for the generic binding")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")

    # Joined from user_contexts / names when selected
    context_name: Optional[str] = None
    context_is_permanent: bool = False
    name_text: Optional[str] = None

    @property
    def key(self) -> AssignmentKey:
        return assignment_key(self.context_id, self.oidc_property)


class AssignmentTarget(BaseModel):
    """One entry of a submitted target state: key -> name or null (unassign)."""

    context_id: str = Field(..., min_length=1, description="Context to bind")
    name_id: Optional[str] = Field(None, description="Name to bind, or null to remove the binding")
    oidc_property: Optional[OIDCProperty] = Field(None, description="OIDC property, or null")

    @property
    def key(self) -> AssignmentKey:
        return assignment_key(self.context_id, self.oidc_property)


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class CreateAssignmentRequest(BaseModel):
    context_id: str = Field(..., min_length=1)
    name_id: str = Field(..., min_length=1)
    oidc_property: Optional[OIDCProperty] = None


class UpdateAssignmentRequest(BaseModel):
    context_id: Optional[str] = Field(None, min_length=1)
    name_id: Optional[str] = Field(None, min_length=1)

    @model_validator(mode="after")
    def require_one_field(self) -> "UpdateAssignmentRequest":
        if self.context_id is None and self.name_id is None:
            raise ValueError("At least one field (context_id or name_id) must be provided for update")
        return self


class BulkAssignmentEntry(BaseModel):
    context_id: str = Field(..., min_length=1)
    name_id: Optional[str] = None
    oidc_property: Optional[OIDCProperty] = None


class BulkAssignmentRequest(BaseModel):
    """Target state for many contexts at once. Size limits come from settings."""

    assignments: list[BulkAssignmentEntry] = Field(..., min_length=1)


class OIDCAssignmentRequest(BaseModel):
    context_id: str = Field(..., min_length=1)
    name_id: str = Field(..., min_length=1)
    oidc_property: OIDCProperty


class OIDCBatchEntry(BaseModel):
    oidc_property: OIDCProperty
    name_id: Optional[str] = None


class OIDCBatchRequest(BaseModel):
    """Target state for the OIDC properties of a single context."""

    context_id: str = Field(..., min_length=1)
    assignments: list[OIDCBatchEntry] = Field(..., min_length=1)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class OperationKind(str, Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"


class ContextSummary(BaseModel):
    id: str
    context_name: str
    description: Optional[str] = None


class AssignmentListResponse(BaseModel):
    assignments: list[Assignment]
    unassigned_contexts: list[ContextSummary]
    total_contexts: int
    assigned_contexts: int


class AssignmentOperationResponse(BaseModel):
    assignment: Assignment
    operation: OperationKind


class DeleteAssignmentResponse(BaseModel):
    deleted: bool
    assignment_id: Optional[str] = None


class ReconciliationSummary(BaseModel):
    """Counts of writes that actually succeeded, plus skipped no-ops."""

    total_processed: int
    created: int = 0
    updated: int = 0
    deleted: int = 0
    unchanged: int = 0
    failed: int = 0


class BulkAssignmentResponse(BaseModel):
    created: int
    updated: int
    deleted: int
    unchanged: int
    failed: int
    assignments: list[Assignment]


class OIDCAssignmentListResponse(BaseModel):
    context_id: str
    context_name: str
    assignments: list[Assignment]
    total: int


class OIDCBatchResponse(BaseModel):
    context_id: str
    context_name: str
    assignments: list[Assignment]
    summary: ReconciliationSummary
