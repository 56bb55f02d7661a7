"""
Name API endpoints.

CRUD for a user's name variants plus the deletion pre-check.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_name_service
from api.middleware.auth import get_current_user
from api.middleware.request_context import RequestContext, get_request_context
from api.models.envelope import ApiResponse
from shared.models import AuthenticatedUser

from .interfaces import INameService
from .models import (
    Name,
    NameListResponse,
    CreateNameRequest,
    UpdateNameRequest,
    NameDeletionCheck,
    NameAssignmentsResponse,
    DeleteNameResponse,
)

router = APIRouter()


@router.get("", response_model=ApiResponse[NameListResponse])
async def list_names(
    user: AuthenticatedUser = Depends(get_current_user),
    service: INameService = Depends(get_name_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """List the current user's names."""
    return ctx.respond(await service.list_names(user.id))


@router.post("", response_model=ApiResponse[Name], status_code=201)
async def create_name(
    request: CreateNameRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: INameService = Depends(get_name_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Create a name variant.

    Marking it preferred clears the flag on every other name.
    """
    return ctx.respond(await service.create_name(user.id, request))


@router.put("/{name_id}", response_model=ApiResponse[Name])
async def update_name(
    name_id: str,
    request: UpdateNameRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: INameService = Depends(get_name_service),
    ctx: RequestContext = Depends(get_request_context),
):
    return ctx.respond(await service.update_name(user.id, name_id, request))


@router.get("/{name_id}/assignments", response_model=ApiResponse[NameAssignmentsResponse])
async def list_name_assignments(
    name_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: INameService = Depends(get_name_service),
    ctx: RequestContext = Depends(get_request_context),
):
    return ctx.respond(await service.list_name_assignments(user.id, name_id))


@router.get("/{name_id}/can-delete", response_model=ApiResponse[NameDeletionCheck])
async def can_delete_name(
    name_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: INameService = Depends(get_name_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """Report whether a name can be deleted, and why not."""
    return ctx.respond(await service.check_deletion(user.id, name_id))


@router.delete("/{name_id}", response_model=ApiResponse[DeleteNameResponse])
async def delete_name(
    name_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: INameService = Depends(get_name_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Delete a name.

    Refused with 409 when it is the last name or is still assigned.
    """
    deleted = await service.delete_name(user.id, name_id)
    return ctx.respond(DeleteNameResponse(deleted=deleted, name_id=name_id))
