"""Fixtures for API tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from workforce_billing.api.app import create_app
from workforce_billing.api.dependencies import get_app_settings, get_now

FROZEN_NOW = datetime(2024, 6, 15, 9, 30, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def client(app_settings) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = create_app()
    app.dependency_overrides[get_app_settings] = lambda: app_settings
    app.dependency_overrides[get_now] = lambda: FROZEN_NOW

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
