from datetime import datetime, timezone

from pydantic import BaseModel, field_serializer


class ClickPoint(BaseModel):
    """Single point in a click timeseries."""

    date: datetime
    clicks: int

    @field_serializer("date")
    def serialize_date(self, value: datetime) -> str:
        """UTC ISO-8601 with millisecond precision, e.g. ``2024-06-01T12:00:00.000Z``."""
        utc = value.astimezone(timezone.utc)
        return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


class DeviceClicks(BaseModel):
    """Clicks for one device type."""

    device: str
    clicks: int


class BrowserClicks(BaseModel):
    """Clicks for one browser."""

    browser: str
    clicks: int


class OsClicks(BaseModel):
    """Clicks for one operating system."""

    os: str
    clicks: int


CategoryClicks = list[DeviceClicks] | list[BrowserClicks] | list[OsClicks]


class LinkClicks(BaseModel):
    """Clicks for one short link."""

    domain: str
    key: str
    url: str
    clicks: int


class ReferrerClicks(BaseModel):
    """Clicks attributed to one referrer."""

    url: str
    clicks: int
