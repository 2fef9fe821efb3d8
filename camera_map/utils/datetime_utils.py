"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling for camera timestamps.
All timestamps are timezone-aware UTC.

Functions:
- utc_now(): Returns timezone-aware UTC datetime
- ensure_utc(): Normalize any datetime into aware UTC
- parse_iso(): Safely parse ISO 8601 string to datetime
- to_iso(): Convert datetime object to ISO 8601 string
- truncate_to_millis(): Drop sub-millisecond precision (BSON dates)
- next_timestamp(): Mutation timestamp strictly after a previous one
"""
from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Optional

MICROSECOND = timedelta(microseconds=1)
MILLISECOND = timedelta(milliseconds=1)


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.
    """
    return datetime.now(dt_timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC (this matches MongoDB/PyMongo behavior)
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def parse_iso(dt_str: Optional[str]) -> Optional[datetime]:
    """
    Parse ISO 8601 string to a UTC datetime.

    Args:
        dt_str: ISO 8601 string (e.g., "2025-12-24T10:30:00Z" or "2025-12-24T10:30:00+05:30")

    Returns:
        timezone-aware UTC datetime, or None if parsing fails
    """
    if not dt_str or not isinstance(dt_str, str):
        return None

    try:
        normalized = dt_str.replace("Z", "+00:00")
        return ensure_utc(datetime.fromisoformat(normalized))
    except ValueError:
        return None


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string with a 'Z' suffix.

    Microseconds are kept so that a stored timestamp reads back unchanged.
    """
    if dt is None:
        return None
    return ensure_utc(dt).isoformat(timespec="microseconds").replace("+00:00", "Z")


def truncate_to_millis(dt: datetime) -> datetime:
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def next_timestamp(
    previous: Optional[datetime] = None,
    resolution: timedelta = MICROSECOND,
) -> datetime:
    """
    Get a timestamp for a mutation.

    The result is the current time at the given storage resolution, pushed
    forward to `previous + resolution` when the clock has not advanced past
    `previous`.

    Args:
        previous: Timestamp of the prior mutation, if any
        resolution: Smallest step the backend can store

    Returns:
        timezone-aware UTC datetime strictly greater than `previous`
    """
    current = utc_now()
    if resolution >= MILLISECOND:
        current = truncate_to_millis(current)

    previous = ensure_utc(previous)
    if previous is not None and current <= previous:
        current = previous + resolution
    return current
