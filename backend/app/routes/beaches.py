"""
Copenhagen Beaches Proxy — Beaches Route Handler
=================================================

What:  The single public endpoint, /api/copenhagen-beaches by default.
Why:   The ESP32 display polls it for the current Copenhagen bathing status.
How:   GET delegates to BeachService; OPTIONS answers the preflight without
       touching the upstream; every other method gets a 405.

Request Flow (GET):
    1. BeachService fetches the full dataset from api.badevand.dk
    2. Records are filtered to København and projected with defaults
    3. Return 200 with the success envelope
    4. On error: UpstreamError propagates to the global handler (500 envelope)

CORS headers are added by CORSHeadersMiddleware, not here.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from app.config import settings
from app.exceptions import MethodNotAllowedError
from app.schemas.beach import BeachListResponse, FailureResponse, MethodNotAllowedResponse
from app.services.beach_service import BeachService, get_beach_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Beaches"])

# Methods that reach the 405 branch through this route. Anything more exotic
# is rejected by Starlette's router and reshaped by the handler in main.py.
UNSUPPORTED_METHODS = ["POST", "PUT", "PATCH", "DELETE", "HEAD"]


@router.get(
    settings.beaches_path,
    response_model=BeachListResponse,
    responses={
        200: {"description": "Copenhagen beaches", "model": BeachListResponse},
        500: {"description": "Upstream fetch failed", "model": FailureResponse},
    },
    summary="List Copenhagen beaches",
    description=(
        "Fetches the Danish beach dataset from api.badevand.dk, keeps the beaches "
        "in København, and returns them with a reduced, defaulted field set."
    ),
)
async def list_beaches(
    service: BeachService = Depends(get_beach_service),
) -> BeachListResponse:
    """
    Return the current Copenhagen beach list.

    A single upstream attempt is made per call. Errors are formatted by the
    global UpstreamError handler as HTTP 500 with the failure envelope.
    """
    return await service.get_beaches()


@router.options(settings.beaches_path, include_in_schema=False)
async def preflight() -> Response:
    """CORS preflight: 200 with an empty body, no upstream call."""
    return Response(status_code=200)


@router.api_route(
    settings.beaches_path,
    methods=UNSUPPORTED_METHODS,
    include_in_schema=False,
    responses={405: {"model": MethodNotAllowedResponse}},
)
async def method_not_allowed(request: Request) -> Response:
    raise MethodNotAllowedError(method=request.method)
