"""
Copenhagen Beaches Proxy — Pydantic Schemas
============================================

What:  Pydantic models for the upstream records and for every response body.
Why:   One place that pins down the wire contract with the ESP32 client.
How:   FastAPI serializes the response models (by alias, so `last_updated`
       goes out as `lastUpdated`); the upstream model is only used to pick
       the fields we care about out of each raw record.

Design Decision:
    Upstream fields are typed `Any` on purpose: the proxy performs no schema
    validation beyond default substitution, so a record with an odd value
    type is passed through rather than rejected.
"""

from datetime import datetime, timezone
from typing import Any, List

from pydantic import BaseModel, Field


def iso_timestamp() -> str:
    """
    Current UTC time as `2024-06-01T10:15:30.123Z`.

    Millisecond precision with a `Z` suffix, the same shape browsers and the
    device firmware produce with `toISOString()`.
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ══════════════════════════════════════════════════════════════════════════
# Upstream Model — one element of the api.badevand.dk array
# ══════════════════════════════════════════════════════════════════════════


class UpstreamBeachRecord(BaseModel):
    """
    What:  A single beach as published by api.badevand.dk.
    Why:   Names the subset of fields we read; everything else is ignored.

    Absent and null fields both arrive here as None. Only the wire key
    `lastUpdated` fills last_updated; a snake_case `last_updated` key is
    treated like any other unknown field.
    """
    name: Any = None
    municipality: Any = None
    region: Any = None
    latitude: Any = None
    longitude: Any = None
    status: Any = None
    last_updated: Any = Field(default=None, alias="lastUpdated")

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class CleanedBeachRecord(BaseModel):
    """
    What:  Field-limited, defaulted projection of an upstream record.
    Who:   Items of `data` in the success envelope.
    """
    name: Any = Field(description="Beach name, or 'Unknown'")
    municipality: Any = Field(description="Municipality, or 'Unknown'")
    region: Any = Field(description="Region, or 'Unknown'")
    latitude: Any = Field(description="Latitude, 0 when missing upstream")
    longitude: Any = Field(description="Longitude, 0 when missing upstream")
    status: Any = Field(description="Bathing water status, or 'Unknown'")
    last_updated: Any = Field(
        alias="lastUpdated",
        description="Upstream last-updated value, or 'Unknown'",
    )

    model_config = {"populate_by_name": True}


class BeachListResponse(BaseModel):
    """
    What:  Success envelope for GET /api/copenhagen-beaches.

    Example:
        {
            "success": true,
            "count": 1,
            "data": [{"name": "Amager Strand", ...}],
            "timestamp": "2024-06-01T10:15:30.123Z",
            "source": "api.badevand.dk"
        }
    """
    success: bool = Field(default=True)
    count: int = Field(description="Number of records in data")
    data: List[CleanedBeachRecord] = Field(description="Beaches in upstream order")
    timestamp: str = Field(default_factory=iso_timestamp)
    source: str = Field(description="Upstream host the data came from")


class FailureResponse(BaseModel):
    """
    What:  Failure envelope returned with HTTP 500 for any upstream problem.
    Why:   The `message` field is the only thing that differs between a
           timeout, a network error, a bad status and a parse error.
    """
    success: bool = Field(default=False)
    error: str = Field(default="Failed to fetch beach data")
    message: str = Field(description="Description of the triggering error")
    timestamp: str = Field(default_factory=iso_timestamp)


class MethodNotAllowedResponse(BaseModel):
    """Body of the 405 response. Deliberately not an envelope."""
    error: str = Field(default="Method not allowed")
    message: str = Field(default="Only GET requests are supported")


class HealthResponse(BaseModel):
    """
    What:  Liveness information for GET /health.
    Why:   Lets the hosting platform check the process without hitting the
           upstream API on every check.
    """
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    upstream: str = Field(description="Configured upstream host")
    uptime_seconds: float = Field(description="Seconds since service started")
