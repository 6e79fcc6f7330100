"""Tests for the health check endpoint."""

from unittest.mock import AsyncMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from movieshelf.database import get_store
from movieshelf.services.errors import StoreUnavailableError


async def test_health_returns_ok(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


async def test_health_reports_unreachable_store(test_app: FastAPI) -> None:
    store = AsyncMock()
    store.ping.side_effect = StoreUnavailableError()

    test_app.dependency_overrides[get_store] = lambda: store
    try:
        async with AsyncClient(
            transport=ASGITransport(app=test_app), base_url="http://test"
        ) as client:
            response = await client.get("/health")
    finally:
        test_app.dependency_overrides.clear()

    assert response.status_code == 503
    assert response.json() == {"status": "degraded", "database": "unavailable"}
