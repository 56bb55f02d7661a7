"""
Response envelope models.

Every endpoint answers with the same shape:

    {"success": true,  "data": {...},  "requestId": "...", "timestamp": "..."}
    {"success": false, "error": {...}, "requestId": "...", "timestamp": "..."}
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ErrorBody(BaseModel):
    """Error payload inside a failed envelope."""

    code: str
    message: str
    details: Optional[Any] = None


class ApiResponse(BaseModel, Generic[T]):
    """Successful response envelope."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: T
    request_id: str = Field(..., alias="requestId")
    timestamp: str


class ApiErrorResponse(BaseModel):
    """Failed response envelope."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    error: ErrorBody
    request_id: str = Field(..., alias="requestId")
    timestamp: str
