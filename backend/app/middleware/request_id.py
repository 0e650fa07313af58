"""
Copenhagen Beaches Proxy — Request ID Middleware
=================================================

What:  Assigns a short correlation ID to each incoming request and returns it
       in the X-Request-ID response header.
Why:   Every log line of one request shares the ID, so a failing device poll
       can be traced through the access log and the upstream error log.
How:   Uses the client-supplied X-Request-ID when present, trimmed and capped
       at MAX_REQUEST_ID_LENGTH characters, otherwise generates one; stores it
       in a ContextVar and in request.state.
When:  Outermost application middleware (runs before logging).
"""

import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Longest client-supplied ID that is written to logs and echoed back
MAX_REQUEST_ID_LENGTH = 64


def _generate_request_id() -> str:
    # 8 chars is enough for correlation and readable in logs
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: Optional[str]) -> str:
    """
    Returns the ID to use for a request.

    A blank or missing header gets a generated ID; anything else is stripped
    and cut to MAX_REQUEST_ID_LENGTH so one access-log line stays one line.
    """
    rid = (supplied or "").strip()[:MAX_REQUEST_ID_LENGTH]
    return rid or _generate_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. If the client sent a non-blank X-Request-ID, reuse it (capped)
        2. Otherwise generate 8 hex characters from a UUID4
        3. Store it in request_id_var and request.state.request_id
        4. Echo it in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID"))

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid

        return response
