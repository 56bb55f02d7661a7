"""
Resolution module data models.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from shared.models import OIDCProperty


class ResolutionSource(str, Enum):
    """Which branch of the precedence chain produced the name."""

    CONTEXT_SPECIFIC = "context_specific"
    OIDC_PROPERTY = "oidc_property"
    PREFERRED_FALLBACK = "preferred_fallback"
    ERROR_FALLBACK = "error_fallback"


# Sources that come from an explicit assignment rather than a fallback
ASSIGNED_SOURCES = frozenset({ResolutionSource.CONTEXT_SPECIFIC, ResolutionSource.OIDC_PROPERTY})


class ResolutionRequest(BaseModel):
    """What the caller wants a name for. Both fields are optional."""

    context_name: Optional[str] = Field(None, max_length=100, description="Requesting context")
    oidc_property: Optional[OIDCProperty] = Field(None, description="Requested OIDC property")

    @field_validator("context_name")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class ResolutionMetadata(BaseModel):
    requested_context: Optional[str] = None
    requested_property: Optional[OIDCProperty] = None
    context_id: Optional[str] = None
    assignment_id: Optional[str] = None
    name_id: Optional[str] = None
    oidc_property: Optional[OIDCProperty] = None
    fallback_reason: Optional[str] = None


class NameResolution(BaseModel):
    """The disclosed name and how it was chosen."""

    name: str
    source: ResolutionSource
    metadata: ResolutionMetadata = Field(default_factory=ResolutionMetadata)


class BatchResolveRequest(BaseModel):
    context_names: list[str] = Field(..., min_length=1, max_length=50)
    oidc_property: Optional[OIDCProperty] = None

    @field_validator("context_names")
    @classmethod
    def check_names(cls, value: list[str]) -> list[str]:
        too_long = [c for c in value if len(c) > 100]
        if too_long:
            raise ValueError("Context names must be at most 100 characters")
        # Repeats collapse to one resolution, first occurrence keeps its place
        return list(dict.fromkeys(value))


class BatchResolveResponse(BaseModel):
    resolutions: dict[str, NameResolution]
    total: int
