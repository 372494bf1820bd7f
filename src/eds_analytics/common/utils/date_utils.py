"""
Date Utilities
==============

Timestamp helpers for building store index values.
"""

from datetime import UTC, datetime


def ensure_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime to timezone-aware UTC.

    Args:
        dt: Datetime object (timezone-aware or naive assumed UTC)

    Returns:
        Timezone-aware datetime in UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_iso_instant(dt: datetime) -> str:
    """
    Format a datetime as an ISO-8601 UTC instant for index query parameters.

    Example:
        2024-03-01T12:00:00.250000Z
    """
    return ensure_utc(dt).isoformat().replace("+00:00", "Z")


def utc_now() -> datetime:
    """
    Get current time in UTC.

    Returns:
        Current UTC datetime
    """
    return datetime.now(UTC)
