"""Shared utilities: datetime, generators."""

from app.shared.utils.datetime import ensure_utc, to_local, utc_now
from app.shared.utils.generators import generate_cuid

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "to_local",
    "utc_now",
]
