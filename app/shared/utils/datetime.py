"""Timezone helpers for flow timestamps.

Stored and transported datetimes are timezone-aware UTC; due-date
arithmetic happens on an organization's wall clock. Use these helpers
instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime, tzinfo


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at API and persistence boundaries to normalize datetimes.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_local(dt: datetime, zone: tzinfo) -> datetime:
    """
    Return dt on the wall clock of zone.

    Naive values are taken as UTC first, so the same instant is shown in
    the target zone regardless of how it arrived.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(zone)
