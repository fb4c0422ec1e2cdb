"""
pytest configuration and shared fixtures for the tripviz tests.

The service has no database or external calls, so the HTTP fixtures only
need the ASGI app and a clean rate limiter.
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient

# Set env vars BEFORE importing the app so Settings picks them up correctly
os.environ.setdefault("ENVIRONMENT", "test")

from tests.builders import make_route  # noqa: E402


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Reset in-memory rate-limit counters so tests are independent."""
    from tripviz.core.rate_limit import limiter

    limiter.reset()
    yield


@pytest.fixture()
async def client():
    """
    HTTPX async test client wired to the FastAPI app.

    Usage:
        async def test_something(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    from tripviz.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def midtown_routes():
    """Four Manhattan routes, in the order the trips API returns them."""
    return [
        make_route(0, (40.7580, -73.9855), (40.7484, -73.9857), trip_count=140),  # Times Sq → Empire State
        make_route(1, (40.7527, -73.9772), (40.7061, -74.0087), trip_count=75),   # Grand Central → Wall St
        make_route(2, (40.7794, -73.9632), (40.7681, -73.9819), trip_count=33),   # The Met → Columbus Circle
        make_route(3, (40.7128, -74.0060), (40.7306, -73.9866), trip_count=12),   # City Hall → East Village
    ]
