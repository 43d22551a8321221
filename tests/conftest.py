from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from mock_analytics.core.random_source import PseudoRandomSource
from mock_analytics.services.analytics_service import AnalyticsService

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def disable_rate_limit():
    from mock_analytics.core.limiter import limiter

    limiter.enabled = False
    yield


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def rng() -> PseudoRandomSource:
    """Seeded random source so generated values are reproducible."""
    return PseudoRandomSource(seed=1234)


@pytest.fixture
def service(rng: PseudoRandomSource) -> AnalyticsService:
    return AnalyticsService(rng)


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    from mock_analytics.api.deps import get_random_source
    from mock_analytics.main import app

    seeds = iter(range(1000, 100000))

    def override_get_random_source():
        return PseudoRandomSource(seed=next(seeds))

    app.dependency_overrides[get_random_source] = override_get_random_source

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
