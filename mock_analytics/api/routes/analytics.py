from fastapi import APIRouter, Depends, Query, Request

from mock_analytics.api.deps import get_analytics_service
from mock_analytics.core.config import settings
from mock_analytics.core.limiter import limiter
from mock_analytics.schemas.analytics import (
    BrowserClicks,
    CategoryClicks,
    ClickPoint,
    DeviceClicks,
    LinkClicks,
    OsClicks,
    ReferrerClicks,
)
from mock_analytics.schemas.common import ErrorResponse
from mock_analytics.services.analytics_service import AnalyticsService
from mock_analytics.services.time_window import resolve_range, resolve_window

router = APIRouter()

_BAD_REQUEST = {400: {"model": ErrorResponse}}

_BUCKET_SCHEMAS = {
    "device": DeviceClicks,
    "browser": BrowserClicks,
    "os": OsClicks,
}


@router.get("/clicks", response_model=list[ClickPoint], responses=_BAD_REQUEST)
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
async def get_clicks(
    request: Request,
    interval: str | None = Query(None, description="Shorthand interval: <number>h|d|m"),
    # from/to stay strings so a bad value reports which field failed
    from_: str | None = Query(None, alias="from", description="ISO-8601 window start"),
    to: str | None = Query(None, description="ISO-8601 window end"),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Get 12 evenly spaced click counts across an interval or explicit date range."""
    window = resolve_window(interval=interval, start=from_, end=to)
    return service.get_clicks(window)


@router.get("/devices/{category}", response_model=CategoryClicks, responses=_BAD_REQUEST)
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
async def get_device_breakdown(
    request: Request,
    category: str,
    from_: str | None = Query(None, alias="from"),
    to: str | None = Query(None),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Get clicks by device, browser or os, highest first.

    ``from``/``to`` are validated like the clicks endpoint but do not affect
    the generated breakdown.
    """
    if from_ is not None or to is not None:
        resolve_range(from_, to)

    buckets = service.get_category_breakdown(category)
    schema = _BUCKET_SCHEMAS[category]
    return [schema(**{category: b.label, "clicks": b.value}) for b in buckets]


@router.get("/links", response_model=list[LinkClicks])
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
async def get_links(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Get generated short links ranked by clicks."""
    return service.get_links()


@router.get("/referrers", response_model=list[ReferrerClicks])
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
async def get_referrers(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Get generated referrers ranked by clicks."""
    return service.get_referrers()
