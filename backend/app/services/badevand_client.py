"""
Copenhagen Beaches Proxy — api.badevand.dk Client
==================================================

What:  Concrete BeachDataSource that downloads the Danish beach dataset over HTTP.
Why:   Keeps every httpx detail (headers, timeout, error translation) in one
       place so the service layer only ever sees UpstreamError subclasses.
How:   Opens a short-lived httpx.AsyncClient per call, issues a single GET,
       checks the status, decodes the JSON array and validates each object
       element into an UpstreamBeachRecord.
Who:   Instantiated once at import time; called by BeachService per request.

Resilience Strategy:
    None beyond the timeout. There is no retry, backoff or circuit breaker:
    the device polls periodically, so a failed request is simply reported
    and the next poll tries again.

Error Translation:
    deadline / httpx.TimeoutException → UpstreamNetworkError ("... timed out ...")
    httpx.HTTPError (transport)     → UpstreamNetworkError
    non-2xx status                  → UpstreamStatusError ("Danish API returned 503: ...")
    invalid JSON / not an array     → UpstreamParseError
    non-object array elements       → skipped (they cannot match a municipality)
"""

import asyncio
import logging
import time
from typing import Any, List, Optional
from urllib.parse import urlparse

import httpx
from pydantic import TypeAdapter

from app.config import settings
from app.exceptions import (
    UpstreamNetworkError,
    UpstreamParseError,
    UpstreamStatusError,
)
from app.schemas.beach import UpstreamBeachRecord
from app.services.upstream_base import BeachDataSource

logger = logging.getLogger(__name__)

# Validates the object elements of the decoded body in one pass
_records_adapter = TypeAdapter(List[UpstreamBeachRecord])


def _reject_constant(token: str) -> Any:
    # NaN / Infinity are not valid JSON and cannot be re-serialized in the response
    raise ValueError(f"Invalid JSON constant: {token}")


class BadevandClient(BeachDataSource):
    """
    HTTP client for https://api.badevand.dk/api/beaches/dk.

    Args:
        url:        Dataset URL (defaults to settings.upstream_url)
        timeout:    Seconds before the call is abandoned (settings.upstream_timeout)
        user_agent: User-Agent header value (settings.upstream_user_agent)
        transport:  Optional httpx transport. Tests pass an httpx.MockTransport
                    here; production leaves it None so httpx opens real sockets.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.upstream_url
        self.timeout = timeout if timeout is not None else settings.upstream_timeout
        self.user_agent = user_agent or settings.upstream_user_agent
        self.transport = transport

    @property
    def host(self) -> str:
        return urlparse(self.url).hostname or self.url

    @property
    def headers(self) -> dict:
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    async def fetch_beaches(self) -> List[UpstreamBeachRecord]:
        """
        Download and decode the full beach dataset.

        Flow:
            1. GET the dataset with a single attempt, bounded by self.timeout
            2. Reject non-2xx statuses with the code and reason in the message
            3. Decode the JSON body and validate its objects as records

        Returns:
            All upstream records in upstream order.

        Raises:
            UpstreamNetworkError, UpstreamStatusError, UpstreamParseError
        """
        start_time = time.perf_counter()
        response = await self._get()
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.debug(
            "Upstream %s answered %d in %.0fms",
            self.host,
            response.status_code,
            duration_ms,
        )

        if not response.is_success:
            raise UpstreamStatusError(
                status_code=response.status_code,
                reason=response.reason_phrase,
                context={"url": self.url, "duration_ms": round(duration_ms, 2)},
            )

        return self._decode(response)

    async def _get(self) -> httpx.Response:
        """
        Issues the GET request and translates transport failures.

        httpx.Timeout only bounds each phase (connect, each read, ...), so an
        upstream trickling bytes could hold the call open forever. wait_for
        puts a deadline on the whole exchange, body download included.
        """
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers=self.headers,
                transport=self.transport,
            ) as client:
                return await asyncio.wait_for(client.get(self.url), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamNetworkError(
                message=f"Request to {self.host} timed out after {self.timeout:g}s",
                context={"url": self.url, "error_type": type(e).__name__},
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamNetworkError(
                message=f"Request to {self.host} failed: {str(e) or type(e).__name__}",
                context={"url": self.url, "error_type": type(e).__name__},
            ) from e

    def _decode(self, response: httpx.Response) -> List[UpstreamBeachRecord]:
        """Decodes the body into records, raising UpstreamParseError if it is not a JSON array."""
        try:
            payload = response.json(parse_constant=_reject_constant)
        except ValueError as e:
            raise UpstreamParseError(
                message=f"Invalid JSON from {self.host}: {e}",
                context={"url": self.url},
            ) from e

        if not isinstance(payload, list):
            raise UpstreamParseError(
                message=(
                    f"Expected a JSON array from {self.host}, "
                    f"got {type(payload).__name__}"
                ),
                context={"url": self.url},
            )

        # A string or number in the array has no municipality, so it could
        # never pass the filter; drop it instead of failing the whole dataset.
        objects = [item for item in payload if isinstance(item, dict)]
        if len(objects) != len(payload):
            logger.warning(
                "Skipped %d non-object element(s) from %s",
                len(payload) - len(objects),
                self.host,
            )

        return _records_adapter.validate_python(objects)


# ── Singleton Instance ────────────────────────────────────────────────────
# Holds configuration only; each call opens its own httpx client.
badevand_client = BadevandClient()
