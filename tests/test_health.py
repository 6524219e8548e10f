"""Tests for health check endpoints."""

from unittest.mock import AsyncMock, patch

import pytest

from geniesugar.core.migrations import get_head_revision

ROUTER = "geniesugar.routers.health"


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    @pytest.mark.asyncio
    async def test_returns_healthy_with_db_connected(self, client):
        with patch(
            f"{ROUTER}.check_database_connection", new_callable=AsyncMock
        ) as mock_db:
            mock_db.return_value = True

            response = await client.get("/health")

            assert response.status_code == 200
            assert response.json() == {"status": "healthy", "database": "connected"}

    @pytest.mark.asyncio
    async def test_returns_degraded_when_db_disconnected(self, client):
        with patch(
            f"{ROUTER}.check_database_connection", new_callable=AsyncMock
        ) as mock_db:
            mock_db.return_value = False

            response = await client.get("/health")

            assert response.status_code == 503
            assert response.json()["status"] == "degraded"


class TestLivenessAndReadiness:
    """Tests for the liveness and readiness endpoints."""

    @pytest.mark.asyncio
    async def test_liveness_is_always_alive(self, client):
        response = await client.get("/health/live")
        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    @pytest.mark.asyncio
    async def test_ready_when_schema_is_current(self, client):
        with (
            patch(f"{ROUTER}.check_database_connection", AsyncMock(return_value=True)),
            patch(
                f"{ROUTER}.get_applied_revision",
                AsyncMock(return_value=get_head_revision()),
            ),
        ):
            response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    @pytest.mark.asyncio
    async def test_not_ready_when_migrations_pending(self, client):
        with (
            patch(f"{ROUTER}.check_database_connection", AsyncMock(return_value=True)),
            patch(
                f"{ROUTER}.get_applied_revision",
                AsyncMock(return_value="003_alert_settings"),
            ),
        ):
            response = await client.get("/health/ready")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["migrations"]["applied"] == "003_alert_settings"

    @pytest.mark.asyncio
    async def test_not_ready_without_database(self, client):
        with patch(
            f"{ROUTER}.check_database_connection", AsyncMock(return_value=False)
        ):
            response = await client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"


class TestRoot:
    @pytest.mark.asyncio
    async def test_root_reports_name_and_version(self, client):
        response = await client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "GenieSugar API"
        assert data["docs"] == "/docs"
