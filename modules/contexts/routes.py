"""
Context API endpoints.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_context_service
from api.middleware.auth import get_current_user
from api.middleware.request_context import RequestContext, get_request_context
from api.models.envelope import ApiResponse
from shared.models import AuthenticatedUser

from .interfaces import IContextService
from .models import (
    Context,
    ContextListResponse,
    CreateContextRequest,
    UpdateContextRequest,
    ContextCompleteness,
    ContextDeletionCheck,
    DeleteContextResponse,
)

router = APIRouter()


@router.get("", response_model=ApiResponse[ContextListResponse])
async def list_contexts(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContextService = Depends(get_context_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """List the current user's contexts with assignment counts."""
    return ctx.respond(await service.list_contexts(user.id))


@router.post("", response_model=ApiResponse[Context], status_code=201)
async def create_context(
    request: CreateContextRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContextService = Depends(get_context_service),
    ctx: RequestContext = Depends(get_request_context),
):
    return ctx.respond(await service.create_context(user.id, request))


@router.put("/{context_id}", response_model=ApiResponse[Context])
async def update_context(
    context_id: str,
    request: UpdateContextRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContextService = Depends(get_context_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """Rename or re-describe a context. The default context keeps its name."""
    return ctx.respond(await service.update_context(user.id, context_id, request))


@router.get("/{context_id}/can-delete", response_model=ApiResponse[ContextDeletionCheck])
async def can_delete_context(
    context_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContextService = Depends(get_context_service),
    ctx: RequestContext = Depends(get_request_context),
):
    return ctx.respond(await service.check_deletion(user.id, context_id))


@router.get("/{context_id}/completeness", response_model=ApiResponse[ContextCompleteness])
async def context_completeness(
    context_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContextService = Depends(get_context_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """Report the required OIDC properties the context is still missing."""
    return ctx.respond(await service.check_completeness(user.id, context_id))


@router.delete("/{context_id}", response_model=ApiResponse[DeleteContextResponse])
async def delete_context(
    context_id: str,
    force: bool = Query(default=False, description="Also remove the context's assignments"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContextService = Depends(get_context_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Delete a context.

    A context that still has assignments is only deleted with force=true.
    """
    return ctx.respond(await service.delete_context(user.id, context_id, force))
