"""API models package."""

from .envelope import ApiResponse, ApiErrorResponse, ErrorBody
from .user import TokenPayload

__all__ = [
    "ApiResponse",
    "ApiErrorResponse",
    "ErrorBody",
    "TokenPayload",
]
