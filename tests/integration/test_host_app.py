"""Integration tests for the FastAPI host application."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from insight import __version__
from insight.api.app import create_app


class TestHealthEndpoint:
    """Tests for GET /health."""

    @pytest.fixture
    async def client(self) -> AsyncGenerator[AsyncClient]:
        """Create async HTTP client with ASGI transport."""
        transport = ASGITransport(app=create_app())
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    async def test_health_reports_healthy(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "insight-dashboard",
            "version": __version__,
        }

    async def test_wrong_http_method_returns_405(self, client: AsyncClient) -> None:
        response = await client.post("/health")

        assert response.status_code == 405

    async def test_api_docs_disabled(self, client: AsyncClient) -> None:
        response = await client.get("/docs")

        assert response.status_code == 404
