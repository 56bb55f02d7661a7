"""
Per-request identifiers.

Stamps every request with a request id and timestamp, echoes the id in the
X-Request-ID header, and exposes both to route handlers for the response
envelope.
"""

import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TypeVar

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ..models.envelope import ApiResponse

T = TypeVar("T")

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    """Build an id of the form req_<epoch-ms>_<hex>."""
    return f"req_{int(time.time() * 1000)}_{secrets.token_hex(5)}"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class RequestContext:
    """Identifiers for the request being handled."""

    request_id: str
    timestamp: str

    def respond(self, data: T) -> ApiResponse[T]:
        """Wrap data in the success envelope."""
        return ApiResponse(data=data, request_id=self.request_id, timestamp=self.timestamp)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        request.state.timestamp = utc_timestamp()
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response


def request_context_from(request: Request) -> RequestContext:
    """Read the identifiers set by the middleware, minting them if absent."""
    request_id = getattr(request.state, "request_id", None)
    timestamp = getattr(request.state, "timestamp", None)
    if request_id is None:
        request_id = new_request_id()
        request.state.request_id = request_id
    if timestamp is None:
        timestamp = utc_timestamp()
        request.state.timestamp = timestamp
    return RequestContext(request_id=request_id, timestamp=timestamp)


async def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency for the current request's identifiers."""
    return request_context_from(request)
