"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from shared.database import is_database_configured

from ..middleware.request_context import RequestContext, get_request_context
from ..models.envelope import ApiResponse

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


@router.get("/health", response_model=ApiResponse[HealthResponse])
async def health_check(ctx: RequestContext = Depends(get_request_context)):
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return ctx.respond(HealthResponse(status="healthy", version=get_settings().app_version))


@router.get("/ready", response_model=ApiResponse[ReadinessResponse])
async def readiness_check(ctx: RequestContext = Depends(get_request_context)):
    """
    Readiness check endpoint.

    Returns 503 until the Supabase connection settings are present.
    """
    if not is_database_configured():
        body = ctx.respond(ReadinessResponse(status="not_ready", database="not_configured"))
        return JSONResponse(status_code=503, content=body.model_dump(mode="json", by_alias=True))
    return ctx.respond(ReadinessResponse(status="ready", database="configured"))
