"""
Assignment API endpoints.

Context assignments, the bulk save, and the per-context OIDC property
bindings.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_assignment_service
from api.middleware.auth import get_current_user
from api.middleware.request_context import RequestContext, get_request_context
from api.models.envelope import ApiResponse
from shared.models import AuthenticatedUser, OIDCProperty

from .interfaces import IAssignmentService
from .models import (
    Assignment,
    AssignmentListResponse,
    AssignmentOperationResponse,
    BulkAssignmentRequest,
    BulkAssignmentResponse,
    CreateAssignmentRequest,
    DeleteAssignmentResponse,
    OIDCAssignmentListResponse,
    OIDCAssignmentRequest,
    OIDCBatchRequest,
    OIDCBatchResponse,
    UpdateAssignmentRequest,
)

router = APIRouter()


@router.get("", response_model=ApiResponse[AssignmentListResponse])
async def list_assignments(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """List context assignments and the contexts that have none yet."""
    return ctx.respond(await service.list_assignments(user.id))


@router.post("", response_model=ApiResponse[AssignmentOperationResponse])
async def create_assignment(
    request: CreateAssignmentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Assign a name to a context.

    Replaces the existing binding for the same context and property.
    """
    return ctx.respond(await service.create_assignment(user.id, request))


@router.post("/bulk", response_model=ApiResponse[BulkAssignmentResponse])
async def bulk_assign(
    request: BulkAssignmentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Save many assignments at once.

    Each entry is created, updated, deleted (name_id null) or left
    unchanged. Counts only include rows that were written.
    """
    return ctx.respond(await service.bulk_assign(user.id, request.assignments))


# OIDC routes are declared before /{assignment_id} so "oidc" is not taken
# for an assignment id.


@router.get("/oidc", response_model=ApiResponse[OIDCAssignmentListResponse])
async def list_oidc_assignments(
    context_id: str = Query(..., min_length=1),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
    ctx: RequestContext = Depends(get_request_context),
):
    return ctx.respond(await service.list_oidc_assignments(user.id, context_id))


@router.post("/oidc", response_model=ApiResponse[AssignmentOperationResponse])
async def assign_oidc(
    request: OIDCAssignmentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
    ctx: RequestContext = Depends(get_request_context),
):
    return ctx.respond(await service.assign_oidc(user.id, request))


@router.delete("/oidc", response_model=ApiResponse[DeleteAssignmentResponse])
async def unassign_oidc(
    context_id: str = Query(..., min_length=1),
    oidc_property: OIDCProperty = Query(...),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """Remove one OIDC property binding from a context."""
    return ctx.respond(await service.unassign_oidc(user.id, context_id, oidc_property))


@router.post("/oidc/batch", response_model=ApiResponse[OIDCBatchResponse])
async def batch_oidc(
    request: OIDCBatchRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
    ctx: RequestContext = Depends(get_request_context),
):
    """Save the OIDC property bindings of one context in a single request."""
    return ctx.respond(await service.batch_oidc(user.id, request))


@router.put("/{assignment_id}", response_model=ApiResponse[Assignment])
async def update_assignment(
    assignment_id: str,
    request: UpdateAssignmentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
    ctx: RequestContext = Depends(get_request_context),
):
    return ctx.respond(await service.update_assignment(user.id, assignment_id, request))


@router.delete("/{assignment_id}", response_model=ApiResponse[DeleteAssignmentResponse])
async def delete_assignment(
    assignment_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
    ctx: RequestContext = Depends(get_request_context),
):
    return ctx.respond(await service.delete_assignment(user.id, assignment_id))
