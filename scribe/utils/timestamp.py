"""Timestamp parsing and day-count utilities."""

from datetime import datetime, timezone
from typing import Callable, Optional, Union

SECONDS_PER_DAY = 60 * 60 * 24
DAYS_PER_YEAR = 365


def now_utc() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_github_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse a GitHub API timestamp into a timezone-aware datetime.

    GitHub returns ISO 8601 strings with a trailing "Z" (e.g. "2023-11-01T00:00:00Z").
    Naive datetimes are assumed to be UTC.

    Args:
        value: ISO 8601 string, datetime, or None

    Returns:
        Aware datetime, or None when value is empty

    Raises:
        ValueError: If the string is not a valid ISO 8601 timestamp

    Examples:
        >>> parse_github_timestamp("2023-11-01T00:00:00Z")
        datetime.datetime(2023, 11, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        dt = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def resolve_clock(now: Union[datetime, Callable[[], datetime], None] = None) -> Callable[[], datetime]:
    """
    Normalize an injected "current time" into a zero-argument clock.

    Args:
        now: Fixed datetime, zero-argument clock, or None for the wall clock

    Returns:
        Callable returning an aware datetime; naive values are assumed to be UTC
    """
    if now is None:
        return now_utc
    if isinstance(now, datetime):
        fixed = parse_github_timestamp(now)
        return lambda: fixed
    return lambda: parse_github_timestamp(now())


def days_since(then: datetime, now: datetime) -> int:
    """
    Whole days elapsed between two datetimes, floored.

    Future timestamps yield negative values, which every recency bucket treats
    as "very recent".
    """
    return int((now - then).total_seconds() // SECONDS_PER_DAY)


def whole_years_between(then: datetime, now: datetime) -> int:
    """Whole 365-day years elapsed between two datetimes, floored."""
    return int((now - then).total_seconds() // (SECONDS_PER_DAY * DAYS_PER_YEAR))
