"""Resolution of query parameters into a validated time window.

Two input shapes are accepted: a shorthand interval such as ``24h``, ``7d`` or
``3m`` (relative to now), or an explicit ``from``/``to`` pair of ISO-8601
timestamps. Both resolve to a ``TimeWindow`` whose duration lies within
``[MIN_WINDOW, MAX_WINDOW]``.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Literal

from mock_analytics.core.exceptions import (
    ConflictingWindowError,
    IntervalTooLongError,
    IntervalTooShortError,
    InvalidRangeError,
    MalformedIntervalError,
    MalformedTimestampError,
    RangeTooLongError,
    RangeTooShortError,
)

logger = logging.getLogger(__name__)

MIN_WINDOW = timedelta(hours=12)
MAX_WINDOW = timedelta(days=90)

DEFAULT_INTERVAL = "24h"
DEFAULT_RANGE = timedelta(hours=12)

HOURS_PER_UNIT = {"h": 1, "d": 24, "m": 30 * 24}

_INTERVAL_RE = re.compile(r"([0-9]+)([dhm])")

WindowOrigin = Literal["interval", "range"]


@dataclass(frozen=True)
class TimeWindow:
    """Canonical ``[start, end]`` window a series is sampled over."""

    start: datetime
    end: datetime
    origin: WindowOrigin

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError("TimeWindow start must not be after end")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def hours(self) -> float:
        return self.duration / timedelta(hours=1)


@dataclass(frozen=True)
class IntervalSpec:
    """Parsed shorthand interval, e.g. ``7d`` -> ``IntervalSpec(7, "d")``."""

    magnitude: int
    unit: Literal["h", "d", "m"]

    @property
    def hours(self) -> int:
        return self.magnitude * HOURS_PER_UNIT[self.unit]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_interval(interval: str) -> IntervalSpec:
    """Parse and validate a shorthand interval string.

    Per-unit limits: at least 12 hours, at most 90 days or 3 months. The
    normalized duration must also fall inside the global window bounds, which
    rejects zero magnitudes and oversized hour counts.
    """
    match = _INTERVAL_RE.fullmatch(interval)
    if not match:
        raise MalformedIntervalError()

    try:
        magnitude = int(match.group(1))
    except ValueError:
        # Digit strings past the int conversion limit
        raise IntervalTooLongError() from None
    parsed = IntervalSpec(magnitude=magnitude, unit=match.group(2))  # type: ignore[arg-type]

    if parsed.unit == "h" and parsed.magnitude < 12:
        raise IntervalTooShortError()
    if parsed.unit == "d" and parsed.magnitude > 90:
        raise IntervalTooLongError()
    if parsed.unit == "m" and parsed.magnitude > 3:
        raise IntervalTooLongError("Maximum interval is 3 months")

    if parsed.hours < MIN_WINDOW / timedelta(hours=1):
        raise IntervalTooShortError()
    if parsed.hours > MAX_WINDOW / timedelta(hours=1):
        raise IntervalTooLongError()
    return parsed


def resolve_interval(interval: str | None, now: datetime | None = None) -> TimeWindow:
    """Resolve a shorthand interval to ``[now - interval, now]``."""
    parsed = parse_interval(interval if interval is not None else DEFAULT_INTERVAL)
    end = now or _utcnow()
    return TimeWindow(start=end - timedelta(hours=parsed.hours), end=end, origin="interval")


def parse_timestamp(value: str, field: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip())
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        raise MalformedTimestampError(field) from None


def resolve_range(
    start: str | None, end: str | None, now: datetime | None = None
) -> TimeWindow:
    """Resolve an explicit ``from``/``to`` pair.

    Whichever bounds are present must parse. If either is missing the window
    falls back to the last 12 hours.
    """
    start_dt = parse_timestamp(start, "from") if start is not None else None
    end_dt = parse_timestamp(end, "to") if end is not None else None

    if start_dt is None or end_dt is None:
        default_end = now or _utcnow()
        return TimeWindow(start=default_end - DEFAULT_RANGE, end=default_end, origin="range")

    if end_dt < start_dt:
        raise InvalidRangeError()

    span = end_dt - start_dt
    if span > MAX_WINDOW:
        raise RangeTooLongError()
    if span < MIN_WINDOW:
        raise RangeTooShortError()

    return TimeWindow(start=start_dt, end=end_dt, origin="range")


def resolve_window(
    interval: str | None = None,
    start: str | None = None,
    end: str | None = None,
    now: datetime | None = None,
) -> TimeWindow:
    """Resolve whichever input shape the caller supplied.

    ``interval`` and ``from``/``to`` are mutually exclusive. With no input at
    all the default interval applies.
    """
    has_range = start is not None or end is not None
    if interval is not None and has_range:
        raise ConflictingWindowError()

    if has_range:
        window = resolve_range(start, end, now=now)
    else:
        window = resolve_interval(interval, now=now)

    logger.debug(
        "Resolved %s window %s -> %s (%.1fh)",
        window.origin,
        window.start.isoformat(),
        window.end.isoformat(),
        window.hours,
    )
    return window
