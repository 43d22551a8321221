"""Unit tests for series sampling and categorical ranking."""

from datetime import datetime, timedelta, timezone

import pytest

from mock_analytics.core.exceptions import UnknownCategoryError
from mock_analytics.core.random_source import PseudoRandomSource
from mock_analytics.schemas.analytics import ClickPoint
from mock_analytics.services.analytics_service import (
    CATEGORY_CATALOG,
    LINK_DOMAIN,
    AnalyticsService,
    sample_timestamps,
)
from mock_analytics.services.time_window import TimeWindow, resolve_interval, resolve_range


class FixedRandomSource:
    """Random source returning the upper bound for every draw."""

    def randint(self, low: int, high: int) -> int:
        return high

    def token(self, length: int) -> str:
        return "x" * length

    def url(self) -> str:
        return "https://example.com/"


class TestSampleTimestamps:
    """Tests for evenly spaced sample instants."""

    @pytest.mark.parametrize("interval", ["12h", "24h", "7d", "90d", "3m"])
    def test_interval_window_spans_to_now(self, interval: str, now: datetime):
        window = resolve_interval(interval, now=now)
        stamps = sample_timestamps(window)

        assert len(stamps) == 12
        assert stamps == sorted(stamps)
        assert len(set(stamps)) == 12
        assert stamps[-1] == now
        step = window.duration / 11
        assert abs(stamps[0] - window.start) < step

    def test_range_window_starts_at_from(self):
        window = resolve_range("2024-05-01T00:00:00Z", "2024-05-12T00:00:00Z")
        stamps = sample_timestamps(window)

        assert stamps[0] == window.start
        assert stamps[-1] == window.end
        # 11 days across 11 steps
        assert all(b - a == timedelta(days=1) for a, b in zip(stamps, stamps[1:]))

    def test_even_spacing_for_interval_window(self, now: datetime):
        window = resolve_interval("11d", now=now)
        stamps = sample_timestamps(window)
        assert stamps[0] == now - timedelta(days=11)
        assert {b - a for a, b in zip(stamps, stamps[1:])} == {timedelta(days=1)}


class TestGetClicks:
    """Tests for the synthetic click series."""

    def test_twelve_points_within_bounds(self, service: AnalyticsService, now: datetime):
        points = service.get_clicks(resolve_interval("24h", now=now))
        assert len(points) == 12
        assert all(0 <= p.clicks <= 500 for p in points)
        assert [p.date for p in points] == sorted(p.date for p in points)

    def test_window_duration_matches_interval(self, service: AnalyticsService, now: datetime):
        window = resolve_interval("30d", now=now)
        points = service.get_clicks(window)
        assert points[-1].date - points[0].date == timedelta(days=30)

    def test_same_seed_is_reproducible(self, now: datetime):
        window = TimeWindow(start=now - timedelta(days=1), end=now, origin="interval")
        first = AnalyticsService(PseudoRandomSource(seed=7)).get_clicks(window)
        second = AnalyticsService(PseudoRandomSource(seed=7)).get_clicks(window)
        assert first == second

    def test_values_come_from_random_source(self, now: datetime):
        points = AnalyticsService(FixedRandomSource()).get_clicks(resolve_interval("24h", now=now))
        assert {p.clicks for p in points} == {500}


class TestCategoryBreakdown:
    """Tests for device/browser/os rankings."""

    @pytest.mark.parametrize("category", ["device", "browser", "os"])
    def test_every_label_within_range(self, service: AnalyticsService, category: str):
        buckets = service.get_category_breakdown(category)
        ranges = {entry.label: (entry.low, entry.high) for entry in CATEGORY_CATALOG[category]}

        assert {b.label for b in buckets} == set(ranges)
        for bucket in buckets:
            low, high = ranges[bucket.label]
            assert low <= bucket.value <= high
            assert bucket.dimension == category

    @pytest.mark.parametrize("category", ["device", "browser", "os"])
    def test_sorted_descending(self, category: str):
        for seed in range(20):
            buckets = AnalyticsService(PseudoRandomSource(seed=seed)).get_category_breakdown(category)
            values = [b.value for b in buckets]
            assert values == sorted(values, reverse=True)

    def test_device_catalog(self, service: AnalyticsService):
        labels = {b.label for b in service.get_category_breakdown("device")}
        assert labels == {"Desktop", "Mobile", "Tablet"}

    def test_os_catalog_size(self, service: AnalyticsService):
        assert len(service.get_category_breakdown("os")) == 5

    @pytest.mark.parametrize("category", ["xyz", "", "Device", "links"])
    def test_unknown_category(self, service: AnalyticsService, category: str):
        with pytest.raises(UnknownCategoryError, match="Invalid category"):
            service.get_category_breakdown(category)


class TestLinksAndReferrers:
    """Tests for generated link and referrer records."""

    def test_links(self):
        for seed in range(20):
            links = AnalyticsService(PseudoRandomSource(seed=seed)).get_links()
            assert 3 <= len(links) <= 9
            clicks = [link.clicks for link in links]
            assert clicks == sorted(clicks, reverse=True)
            for link in links:
                assert link.domain == LINK_DOMAIN
                assert len(link.key) == 6
                assert link.key.isalnum()
                assert link.url.startswith(("http://", "https://"))
                assert 0 <= link.clicks <= 1000

    def test_links_use_upper_bounds(self):
        links = AnalyticsService(FixedRandomSource()).get_links()
        assert len(links) == 9
        assert all(link.clicks == 1000 for link in links)

    def test_referrers(self):
        for seed in range(20):
            referrers = AnalyticsService(PseudoRandomSource(seed=seed)).get_referrers()
            assert 1 <= len(referrers) <= 3
            clicks = [r.clicks for r in referrers]
            assert clicks == sorted(clicks, reverse=True)
            assert all(0 <= c <= 200 for c in clicks)


class TestPseudoRandomSource:
    """Tests for the default random source."""

    def test_randint_inclusive(self):
        rng = PseudoRandomSource(seed=3)
        draws = {rng.randint(1, 3) for _ in range(200)}
        assert draws == {1, 2, 3}

    def test_randint_rejects_inverted_bounds(self):
        with pytest.raises(ValueError):
            PseudoRandomSource().randint(5, 1)

    def test_token_is_alphanumeric(self):
        token = PseudoRandomSource(seed=3).token(6)
        assert len(token) == 6
        assert token.isascii() and token.isalnum()

    def test_instances_do_not_share_state(self):
        a = PseudoRandomSource(seed=11)
        b = PseudoRandomSource(seed=11)
        # Interleaved draws: each instance advances only its own generator
        pairs = [(a.randint(0, 1000), b.randint(0, 1000)) for _ in range(10)]
        assert all(x == y for x, y in pairs)

    def test_url_shape(self):
        url = PseudoRandomSource(seed=5).url()
        scheme, rest = url.split("://", 1)
        assert scheme in ("http", "https")
        host = rest.split("/", 1)[0]
        assert "." in host


def test_window_helpers_are_timezone_aware(now: datetime):
    window = resolve_interval("24h", now=now)
    assert window.start.tzinfo == timezone.utc


class TestClickPointSerialization:
    """Tests for the wire format of click timestamps."""

    def test_truncates_to_milliseconds(self):
        point = ClickPoint(date=datetime(2024, 6, 1, 12, 0, 5, 969058, tzinfo=timezone.utc), clicks=3)
        assert point.model_dump(mode="json")["date"] == "2024-06-01T12:00:05.969Z"

    def test_offsets_are_rendered_in_utc(self):
        offset = timezone(timedelta(hours=2))
        point = ClickPoint(date=datetime(2024, 6, 1, 14, 0, tzinfo=offset), clicks=3)
        assert point.model_dump(mode="json")["date"] == "2024-06-01T12:00:00.000Z"
