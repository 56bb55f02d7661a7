"""
OAuth module data models.

Third-party demo applications present an opaque session token (tnp_...)
and receive OIDC-style claims for the context the user chose for them.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field

from modules.resolution.models import ResolutionSource


class OAuthClient(BaseModel):
    client_id: str
    app_name: str
    display_name: Optional[str] = None


class OAuthSession(BaseModel):
    """An issued session token. Only non-expired sessions are ever loaded."""

    session_token: str
    profile_id: str
    client_id: str
    expires_at: datetime
    used_at: Optional[datetime] = None


class AppContextAssignment(BaseModel):
    """The context a user presents to one client application."""

    profile_id: str
    client_id: str
    context_id: str
    updated_at: Optional[datetime] = None


class OAuthResolveResponse(BaseModel):
    name: str
    source: ResolutionSource
    claims: dict[str, Any]
    resolved_at: str


class UpdateAppAssignmentRequest(BaseModel):
    context_id: str = Field(..., min_length=1, description="Context to present to the application")


class AppAssignmentResponse(BaseModel):
    client_id: str
    app_name: str
    display_name: Optional[str] = None
    context_id: Optional[str] = None
    context_name: Optional[str] = None


class ConnectedApp(BaseModel):
    """A registered application the user has chosen a context for."""

    client_id: str
    app_name: str
    display_name: Optional[str] = None
    context_id: str
    context_name: Optional[str] = None
    active_sessions: int = 0
    updated_at: Optional[datetime] = None


class ConnectedAppsResponse(BaseModel):
    connected_apps: list[ConnectedApp]
    total: int
