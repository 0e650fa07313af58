"""
Copenhagen Beaches Proxy — Test Configuration (conftest.py)
============================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (sample upstream data, mocked
       upstream transport, ASGI test client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Overview:
    ├── upstream_records: Realistic slice of the api.badevand.dk array
    ├── make_upstream:    Builds a BadevandClient backed by httpx.MockTransport
    ├── use_upstream:     Routes the app's BeachService to a mocked upstream
    └── test_client:      HTTPX AsyncClient for API endpoint testing

No test touches the real api.badevand.dk.
"""

import os
from typing import Callable, List

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["UPSTREAM_URL"] = "https://api.badevand.dk/api/beaches/dk"

from app.services.badevand_client import BadevandClient  # noqa: E402
from app.services.beach_service import BeachService, get_beach_service  # noqa: E402


@pytest.fixture
def upstream_records() -> List[dict]:
    """
    Provides a small upstream payload with two Copenhagen beaches and
    one beach elsewhere, interleaved so ordering can be checked.
    """
    return [
        {
            "name": "Amager Strand",
            "municipality": "København",
            "region": "Region Hovedstaden",
            "latitude": 55.6597,
            "longitude": 12.6484,
            "status": "Open",
            "lastUpdated": "2024-06-01T08:00:00Z",
            "waterTemperature": 17.5,
        },
        {
            "name": "Den Permanente",
            "municipality": "Aarhus",
            "region": "Region Midtjylland",
            "latitude": 56.1678,
            "longitude": 10.2253,
            "status": "Open",
            "lastUpdated": "2024-06-01T08:00:00Z",
        },
        {
            "name": "Islands Brygge Havnebad",
            "municipality": "København",
            "region": "Region Hovedstaden",
            "latitude": 55.6665,
            "longitude": 12.5771,
            "status": "Closed",
            "lastUpdated": "2024-06-01T07:30:00Z",
        },
    ]


@pytest.fixture
def make_upstream() -> Callable[..., BadevandClient]:
    """
    Factory for a BadevandClient whose HTTP traffic goes to `handler`.

    Usage:
        client = make_upstream(lambda request: httpx.Response(503))
    """
    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> BadevandClient:
        return BadevandClient(transport=httpx.MockTransport(handler), **kwargs)
    return _make


@pytest.fixture
def use_upstream(make_upstream):
    """
    Points the running app at a mocked upstream.

    Returns a function taking an httpx.MockTransport handler (plus any
    BadevandClient keyword such as timeout); the override is removed again
    after the test.
    """
    from app.main import app

    def _use(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> BeachService:
        service = BeachService(source=make_upstream(handler, **kwargs))
        app.dependency_overrides[get_beach_service] = lambda: service
        return service

    yield _use
    app.dependency_overrides.pop(get_beach_service, None)


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app, no server needed.
    """
    from app.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
