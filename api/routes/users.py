"""
User-related endpoints.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr

from shared.models import AuthenticatedUser
from ..middleware.auth import get_current_user
from ..middleware.request_context import RequestContext, get_request_context
from ..models.envelope import ApiResponse

router = APIRouter()


class UserProfileResponse(BaseModel):
    """User profile response model."""

    id: str
    email: EmailStr
    email_verified: bool
    role: str


@router.get("/me", response_model=ApiResponse[UserProfileResponse])
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Get the current user's profile.

    Requires authentication.
    """
    return ctx.respond(UserProfileResponse(
        id=user.id,
        email=user.email,
        email_verified=user.email_verified,
        role=user.role,
    ))
