"""
User token models for authentication.

These models represent the claims of a Supabase user JWT.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional


class TokenPayload(BaseModel):
    """JWT token payload structure."""
    model_config = ConfigDict(extra="ignore")

    sub: str  # User ID
    email: str
    email_confirmed_at: Optional[str] = None
    aud: str  # Audience
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
    role: Optional[str] = None
