"""Helpers shared by request schemas."""

from datetime import datetime, timezone
from typing import Any


def ensure_aware_datetime(v: Any) -> Any:
    """Accept datetime or ISO string; treat naive datetimes as UTC (common from frontends)."""
    if v is None:
        return v
    if isinstance(v, str):
        dt = datetime.fromisoformat(v.replace("Z", "+00:00"))
    elif isinstance(v, datetime):
        dt = v
    else:
        return v
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
