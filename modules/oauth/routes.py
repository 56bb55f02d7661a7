"""
OAuth API endpoints.

POST /resolve is called by client applications with a session token.
The assignment endpoints are called by the signed-in user.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_oauth_service
from api.middleware.auth import get_bearer_token, get_current_user
from api.middleware.request_context import RequestContext, get_request_context
from api.models.envelope import ApiResponse
from shared.models import AuthenticatedUser

from .interfaces import IOAuthService
from .models import (
    OAuthResolveResponse,
    AppAssignmentResponse,
    ConnectedAppsResponse,
    UpdateAppAssignmentRequest,
)

router = APIRouter()


@router.post("/resolve", response_model=ApiResponse[OAuthResolveResponse])
async def resolve_claims(
    session_token: str = Depends(get_bearer_token),
    service: IOAuthService = Depends(get_oauth_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Resolve OIDC claims for a session token.

    Requires `Authorization: Bearer tnp_...`. Returns the disclosed name,
    the branch that produced it, and the full claim set.
    """
    return ctx.respond(await service.resolve_session(session_token))


@router.get("/connected-apps", response_model=ApiResponse[ConnectedAppsResponse])
async def list_connected_apps(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IOAuthService = Depends(get_oauth_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """List the applications the current user has chosen a context for."""
    return ctx.respond(await service.list_connected_apps(user.id))


@router.get("/assignments/{client_id}", response_model=ApiResponse[AppAssignmentResponse])
async def get_app_assignment(
    client_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IOAuthService = Depends(get_oauth_service),
    ctx: RequestContext = Depends(get_request_context),
):
    return ctx.respond(await service.get_app_assignment(user.id, client_id))


@router.put("/assignments/{client_id}", response_model=ApiResponse[AppAssignmentResponse])
async def update_app_assignment(
    client_id: str,
    request: UpdateAppAssignmentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IOAuthService = Depends(get_oauth_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """Choose which context a client application sees."""
    return ctx.respond(await service.update_app_assignment(user.id, client_id, request.context_id))
