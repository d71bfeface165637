"""
Time helpers for recency scoring and feed filtering.

All datetimes handled by the engine are timezone-aware UTC. Naive values
coming from clients are interpreted as UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone

SECONDS_PER_DAY = 60 * 60 * 24


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_between(earlier: datetime, later: datetime) -> float:
    """Return the fractional number of days from ``earlier`` to ``later``.

    Negative when ``earlier`` is actually after ``later``.

    Args:
        earlier: Start instant.
        later: End instant.

    Returns:
        ``(later - earlier)`` expressed in days, with sub-day precision.
    """
    delta = ensure_utc(later) - ensure_utc(earlier)
    return delta.total_seconds() / SECONDS_PER_DAY
