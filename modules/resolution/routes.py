"""
Name resolution preview endpoints.

Lets a signed-in user see which name a given context would be shown.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_resolution_service
from api.middleware.auth import get_current_user
from api.middleware.request_context import RequestContext, get_request_context
from api.models.envelope import ApiResponse
from shared.models import AuthenticatedUser

from .interfaces import IResolutionService
from .models import NameResolution, ResolutionRequest, BatchResolveRequest, BatchResolveResponse

router = APIRouter()


@router.post("/resolve", response_model=ApiResponse[NameResolution])
async def resolve_name(
    request: ResolutionRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IResolutionService = Depends(get_resolution_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Resolve the current user's name for a context and/or OIDC property.

    The response carries the source branch: context_specific,
    oidc_property, preferred_fallback or error_fallback.
    """
    return ctx.respond(await service.resolve(user.id, request))


@router.post("/resolve/batch", response_model=ApiResponse[BatchResolveResponse])
async def resolve_names_batch(
    request: BatchResolveRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IResolutionService = Depends(get_resolution_service),
    ctx: RequestContext = Depends(get_request_context),
):
    return ctx.respond(await service.resolve_batch(user.id, request.context_names, request.oidc_property))
