"""
Copenhagen Beaches Proxy — Health Check Route
==============================================

What:  Liveness endpoint for the hosting platform's health checks.
Why:   Lets a load balancer or container runtime decide whether the process
       is up without spending an upstream download per check.
How:   Reports version, configured upstream host and uptime. It does NOT call
       api.badevand.dk; upstream trouble surfaces as 500s on the beach route.
"""

import logging
import time

from fastapi import APIRouter

from app import __version__
from app.schemas.beach import HealthResponse
from app.services.badevand_client import badevand_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        upstream=badevand_client.host,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
