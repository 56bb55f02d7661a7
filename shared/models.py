"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class OIDCProperty(str, Enum):
    """Standard OpenID Connect claim names a name can be bound to."""

    GIVEN_NAME = "given_name"
    FAMILY_NAME = "family_name"
    NAME = "name"
    NICKNAME = "nickname"
    DISPLAY_NAME = "display_name"
    PREFERRED_USERNAME = "preferred_username"
    MIDDLE_NAME = "middle_name"


# Properties the permanent (default) context must always keep assigned
REQUIRED_OIDC_PROPERTIES: frozenset[OIDCProperty] = frozenset({
    OIDCProperty.GIVEN_NAME,
    OIDCProperty.FAMILY_NAME,
    OIDCProperty.NAME,
})


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from JWT claims and made available
    to route handlers via dependency injection. Every store query
    made on behalf of a request is scoped by its id.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: EmailStr = Field(..., description="User's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")

    created_at: Optional[datetime] = Field(None, description="Account creation time")
    last_sign_in: Optional[datetime] = Field(None, description="Last sign-in time")

    role: str = Field(default="user", description="User role")

    model_config = {
        "frozen": True,
        "extra": "ignore",  # Ignore extra fields from JWT
    }
