"""
Contexts module data models.

A Context is a named audience ("Work", "Gaming Friends") a user discloses
names to. Every user has exactly one permanent context, created at signup,
which cannot be deleted or renamed.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

CONTEXT_NAME_PATTERN = r"^[a-zA-Z0-9\s\-_]+$"


class Context(BaseModel):
    """A stored context."""

    id: str = Field(..., description="Context ID (UUID)")
    user_id: str = Field(..., description="Owning user ID")
    context_name: str = Field(..., description="Display name, unique per user")
    description: Optional[str] = Field(None, description="Optional description")
    is_permanent: bool = Field(default=False, description="Whether this is the user's default context")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")


class ContextWithStats(Context):
    """Context plus how many assignments reference it."""

    assignment_count: int = 0


class CreateContextRequest(BaseModel):
    context_name: str = Field(..., min_length=1, max_length=100, pattern=CONTEXT_NAME_PATTERN)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("context_name")
    @classmethod
    def strip_context_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Context name is required")
        return value


class UpdateContextRequest(BaseModel):
    context_name: Optional[str] = Field(None, min_length=1, max_length=100, pattern=CONTEXT_NAME_PATTERN)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("context_name")
    @classmethod
    def strip_context_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Context name is required")
        return value

    @model_validator(mode="after")
    def require_one_field(self) -> "UpdateContextRequest":
        if self.context_name is None and self.description is None:
            raise ValueError("At least one field must be provided for update")
        return self


class ContextListResponse(BaseModel):
    contexts: list[ContextWithStats]
    total: int


class DeletionImpact(BaseModel):
    """What deleting a context would remove."""

    assignment_count: int = 0
    affected_properties: list[str] = Field(default_factory=list)


class ContextDeletionCheck(BaseModel):
    context_id: str
    context_name: str
    can_delete: bool
    requires_force: bool
    reason: Optional[str] = None
    impact: DeletionImpact


class DeleteContextResponse(BaseModel):
    deleted: bool
    context_id: str
    removed_assignments: int = 0


class ContextCompleteness(BaseModel):
    """Which required OIDC properties a context has bound."""

    context_id: str
    context_name: str
    is_complete: bool
    required_properties: list[str]
    assigned_properties: list[str]
    missing_properties: list[str]
    assignment_count: int
    completion_percentage: float
