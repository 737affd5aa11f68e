"""Domain enumerations for the FlowSense application.

Enums represent fixed sets of domain values (e.g. TAT calculation mode).
"""

from enum import Enum


class TATType(str, Enum):
    """Calendar-arithmetic mode of a flow rule's turn-around time.

    HOUR and SPECIFY advance through office hours; DAY advances by working
    days keeping the time of day; BEFORE walks backwards by working days.
    """

    HOUR = "hourtat"
    DAY = "daytat"
    BEFORE = "beforetat"
    SPECIFY = "specifytat"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid TAT type values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [tat_type.value for tat_type in cls]

    @classmethod
    def lookup(cls, raw: str | None) -> "TATType | None":
        """Resolve a tat_type string case-insensitively; None when unrecognized.

        Accepts the canonical values and the short aliases ('hour', 'day',
        'before', 'specify').
        """
        return _TAT_TYPE_ALIASES.get((raw or "").strip().lower())

    @classmethod
    def parse(cls, raw: str | None) -> "TATType":
        """Like lookup, but unrecognized values fall back to HOUR."""
        return cls.lookup(raw) or cls.HOUR


_TAT_TYPE_ALIASES: dict[str, TATType] = {
    **{t.value: t for t in TATType},
    "hour": TATType.HOUR,
    "day": TATType.DAY,
    "before": TATType.BEFORE,
    "specify": TATType.SPECIFY,
}


class TaskStatus(str, Enum):
    """Lifecycle status of a task instance inside a running flow."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MergeCondition(str, Enum):
    """When a task fed by several rules (a parallel join) may be created.

    ALL waits until every prerequisite task has completed; ANY proceeds on
    the first one.
    """

    ALL = "all"
    ANY = "any"

    @classmethod
    def values(cls) -> list[str]:
        return [condition.value for condition in cls]
