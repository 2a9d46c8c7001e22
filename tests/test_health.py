"""
Tests for the FastAPI application and health endpoint.
"""

import pytest
from unittest.mock import patch, AsyncMock
from httpx import AsyncClient, ASGITransport

from brandops.main import create_app
from brandops.storage.memory import MemoryStorage


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.mark.anyio
async def test_health_endpoint_healthy(settings):
    """Health endpoint should return healthy when storage answers."""
    app = create_app(storage=MemoryStorage(seed=False), settings=settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["storage"] == "memory"
        assert data["service"] == "BrandOps Dashboard"


@pytest.mark.anyio
async def test_health_endpoint_degraded(settings):
    """Health endpoint should return degraded when storage is unreachable."""
    storage = MemoryStorage(seed=False)
    with patch.object(storage, "ping", new_callable=AsyncMock, return_value=False):
        app = create_app(storage=storage, settings=settings)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/health")
            assert response.status_code == 200
            data = response.json()
            assert data["status"] == "degraded"
            assert data["storage"] == "memory"


@pytest.mark.anyio
async def test_lifespan_starts_and_closes_storage(settings):
    storage = MemoryStorage(seed=False)
    app = create_app(storage=storage, settings=settings)
    with patch.object(storage, "startup", new_callable=AsyncMock) as startup, \
            patch.object(storage, "close", new_callable=AsyncMock) as close:
        async with app.router.lifespan_context(app):
            startup.assert_awaited_once()
        close.assert_awaited_once()
