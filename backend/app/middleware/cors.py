"""
Copenhagen Beaches Proxy — CORS Headers Middleware
===================================================

What:  Stamps the three permissive CORS headers onto every response.
Why:   The ESP32 firmware and browser dashboards call the proxy from other
       origins. They must see the headers on every answer, including 405s,
       500s and requests that carry no Origin header at all.
How:   Runs the rest of the stack, then sets the headers on whatever response
       comes back.

Why not FastAPI's CORSMiddleware:
    Starlette's CORSMiddleware only answers when an Origin header is present,
    and it answers preflights itself with its own status and header set.
    Here OPTIONS is handled by the route (200, empty body) and the header
    set is fixed.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Adds CORS_HEADERS to every response, overwriting any existing values."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
