from fastapi import Depends

from mock_analytics.core.random_source import PseudoRandomSource, RandomSource
from mock_analytics.services.analytics_service import AnalyticsService


def get_random_source() -> RandomSource:
    """Dependency providing a fresh, independently seeded random source per request."""
    return PseudoRandomSource()


def get_analytics_service(
    rng: RandomSource = Depends(get_random_source),
) -> AnalyticsService:
    """Dependency to build the analytics service for the current request."""
    return AnalyticsService(rng)
