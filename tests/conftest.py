"""Pytest configuration and shared fixtures.

The suite runs without a database: endpoints are exercised through
``app.dependency_overrides`` with mocked sessions.
"""

import os
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set testing mode BEFORE importing app (NullPool, rate limiter disabled)
os.environ["TESTING"] = "true"

from geniesugar.config import settings

# Override settings for testing
settings.testing = True

from geniesugar.main import app


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing the API."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
