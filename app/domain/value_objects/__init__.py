"""Domain value objects and shared value types."""

from app.domain.value_objects.core import DEFAULT_WEEKEND_DAYS, TATConfig

__all__ = [
    "DEFAULT_WEEKEND_DAYS",
    "TATConfig",
]
