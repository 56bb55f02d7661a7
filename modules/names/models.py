"""
Names module data models.

A Name is one text variant of a user's identity (legal name, nickname,
professional alias, ...). At most one of a user's names is preferred.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field, field_validator, model_validator

from shared.models import OIDCProperty


class NameCategory(str, Enum):
    """Closed set of name categories."""

    LEGAL = "LEGAL"
    PREFERRED = "PREFERRED"
    NICKNAME = "NICKNAME"
    ALIAS = "ALIAS"
    PROFESSIONAL = "PROFESSIONAL"
    CULTURAL = "CULTURAL"


# A category is either one of the closed set above or an OIDC property tag
Category = Union[NameCategory, OIDCProperty]


class DeletionReason(str, Enum):
    """Why a name may or may not be deleted."""

    DELETION_ALLOWED = "DELETION_ALLOWED"
    LAST_NAME_PROTECTION = "LAST_NAME_PROTECTION"
    PERMANENT_CONTEXT_ASSIGNED = "PERMANENT_CONTEXT_ASSIGNED"
    CONTEXT_ASSIGNED = "CONTEXT_ASSIGNED"


class Name(BaseModel):
    """A stored name variant."""

    id: str = Field(..., description="Name ID (UUID)")
    user_id: str = Field(..., description="Owning user ID")
    name_text: str = Field(..., description="The name itself")
    category: Category = Field(default=NameCategory.NICKNAME, description="Name category")
    is_preferred: bool = Field(default=False, description="Whether this is the preferred name")
    verified: bool = Field(default=False, description="Whether the name has been verified")
    source: Optional[str] = Field(None, description="Where the name came from")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")


def _clean_name_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Name text is required")
    return value


class CreateNameRequest(BaseModel):
    """Request to create a name."""

    name_text: str = Field(..., min_length=1, max_length=100, description="Name text")
    category: Category = Field(..., description="Name category")
    is_preferred: bool = Field(default=False, description="Mark as the preferred name")
    source: str = Field(default="user_created", max_length=50)

    @field_validator("name_text")
    @classmethod
    def strip_name_text(cls, value: str) -> str:
        return _clean_name_text(value)


class UpdateNameRequest(BaseModel):
    """Request to update a name. At least one field must be set."""

    name_text: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[Category] = None
    is_preferred: Optional[bool] = None

    @field_validator("name_text")
    @classmethod
    def strip_name_text(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _clean_name_text(value)

    @model_validator(mode="after")
    def require_one_field(self) -> "UpdateNameRequest":
        if self.name_text is None and self.category is None and self.is_preferred is None:
            raise ValueError("At least one field must be provided for update")
        return self


class NameListResponse(BaseModel):
    """All names owned by a user."""

    names: list[Name]
    total: int
    preferred_name_id: Optional[str] = None


class NameDeletionCheck(BaseModel):
    """Whether a name can be deleted, and why."""

    name_id: str
    can_delete: bool
    reason_code: DeletionReason
    reason: str
    assignment_count: int = 0


class DeleteNameResponse(BaseModel):
    deleted: bool
    name_id: str


class NameContextAssignment(BaseModel):
    """One place a name is bound."""

    assignment_id: str
    context_id: str
    context_name: Optional[str] = None
    is_permanent: bool = False
    oidc_property: Optional[OIDCProperty] = None


class NameAssignmentsResponse(BaseModel):
    name_id: str
    name_text: str
    assignments: list[NameContextAssignment]
    total: int
