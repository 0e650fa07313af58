"""
Copenhagen Beaches Proxy — Request Logging Middleware
======================================================

What:  One access-log line per HTTP request.
Why:   The device polls on a schedule; the access log shows at a glance
       whether polls succeed and how long the upstream round trip takes.
How:   Times the rest of the stack and logs method, path, status, duration,
       request ID and client IP.
When:  After RequestIDMiddleware (uses request ID for correlation).

Log Line:
    GET /api/copenhagen-beaches 200 412.3ms [a1b2c3d4] from 192.168.1.50

What we DON'T log: request headers or bodies.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("beachproxy.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Level by status:
        5xx → ERROR, 4xx → WARNING, everything else → INFO

    Typical durations:
        - GET /health: 1-5ms
        - OPTIONS /api/copenhagen-beaches: 1-5ms (no upstream call)
        - GET /api/copenhagen-beaches: 200-2000ms (upstream download dominates)
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # request.client may be None in testing
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        # Health checks would drown out real traffic
        if path == "/health":
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
