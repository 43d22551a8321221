from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple

from mock_analytics.core.exceptions import UnknownCategoryError
from mock_analytics.core.random_source import RandomSource
from mock_analytics.schemas.analytics import ClickPoint, LinkClicks, ReferrerClicks
from mock_analytics.services.time_window import TimeWindow

SAMPLE_POINTS = 12
MAX_POINT_CLICKS = 500

LINK_DOMAIN = "short.link"
LINK_KEY_LENGTH = 6
LINK_COUNT = (3, 9)
MAX_LINK_CLICKS = 1000

REFERRER_COUNT = (1, 3)
MAX_REFERRER_CLICKS = 200


class LabelRange(NamedTuple):
    label: str
    low: int
    high: int


# Sampling ranges are inclusive. Adding a dimension only needs a new entry here.
CATEGORY_CATALOG: dict[str, list[LabelRange]] = {
    "device": [
        LabelRange("Desktop", 100, 1000),
        LabelRange("Mobile", 100, 1000),
        LabelRange("Tablet", 50, 500),
    ],
    "browser": [
        LabelRange("Chrome", 100, 1000),
        LabelRange("Firefox", 50, 800),
        LabelRange("Safari", 50, 700),
        LabelRange("Edge", 20, 500),
    ],
    "os": [
        LabelRange("Windows", 100, 1000),
        LabelRange("MacOS", 50, 800),
        LabelRange("Android", 50, 700),
        LabelRange("iOS", 40, 600),
        LabelRange("Linux", 10, 300),
    ],
}


@dataclass(frozen=True)
class CategoryBucket:
    """One scored label of a categorical breakdown."""

    label: str
    dimension: str
    value: int


def sample_timestamps(window: TimeWindow, points: int = SAMPLE_POINTS) -> list[datetime]:
    """Return ``points`` evenly spaced instants across ``window``, oldest first.

    Interval windows are anchored on their end (now) and count backward, range
    windows are anchored on their start and count forward. Either way the
    result is ascending and spans the whole window.
    """
    steps = points - 1
    if window.origin == "interval":
        stamps = [window.end - window.duration * i / steps for i in range(points)]
        stamps.reverse()
        return stamps
    return [window.start + window.duration * i / steps for i in range(points)]


class AnalyticsService:
    """Generates synthetic analytics responses from a random source."""

    def __init__(self, rng: RandomSource):
        self.rng = rng

    def get_clicks(self, window: TimeWindow) -> list[ClickPoint]:
        """Click counts at 12 evenly spaced points across the window."""
        return [
            ClickPoint(date=stamp, clicks=self.rng.randint(0, MAX_POINT_CLICKS))
            for stamp in sample_timestamps(window)
        ]

    def get_category_breakdown(self, category: str) -> list[CategoryBucket]:
        """Score every label of a catalog dimension, highest first."""
        catalog = CATEGORY_CATALOG.get(category)
        if catalog is None:
            raise UnknownCategoryError()

        buckets = [
            CategoryBucket(
                label=entry.label,
                dimension=category,
                value=self.rng.randint(entry.low, entry.high),
            )
            for entry in catalog
        ]
        buckets.sort(key=lambda b: b.value, reverse=True)
        return buckets

    def get_links(self) -> list[LinkClicks]:
        """Between 3 and 9 generated short links, most clicked first."""
        count = self.rng.randint(*LINK_COUNT)
        links = [
            LinkClicks(
                domain=LINK_DOMAIN,
                key=self.rng.token(LINK_KEY_LENGTH),
                url=self.rng.url(),
                clicks=self.rng.randint(0, MAX_LINK_CLICKS),
            )
            for _ in range(count)
        ]
        links.sort(key=lambda link: link.clicks, reverse=True)
        return links

    def get_referrers(self) -> list[ReferrerClicks]:
        """Between 1 and 3 generated referrers, most clicks first."""
        count = self.rng.randint(*REFERRER_COUNT)
        referrers = [
            ReferrerClicks(url=self.rng.url(), clicks=self.rng.randint(0, MAX_REFERRER_CLICKS))
            for _ in range(count)
        ]
        referrers.sort(key=lambda r: r.clicks, reverse=True)
        return referrers
