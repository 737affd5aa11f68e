"""Domain value objects for the FlowSense application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass, field
from datetime import date
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.domain.exceptions import InvalidTATConfigException

# Python weekday numbering: Monday=0 ... Sunday=6.
SATURDAY = 5
SUNDAY = 6
DEFAULT_WEEKEND_DAYS: tuple[int, ...] = (SATURDAY, SUNDAY)


def _validate_hour(value: int, field_name: str) -> None:
    """Validate an hour of day (0-23). Raises InvalidTATConfigException on failure."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTATConfigException(
            f"{field_name} must be an integer hour", field=field_name
        )
    if value < 0 or value > 23:
        raise InvalidTATConfigException(
            f"{field_name} must be between 0 and 23", field=field_name
        )


@dataclass(frozen=True)
class TATConfig:
    """Office-hours calendar used for turn-around-time arithmetic (per organization).

    Working time is [office_start_hour, office_end_hour) on every day that is
    not a skipped weekend day, on the wall clock of ``timezone``. Immutable
    during a calculation; admins replace it between calculations.

    Raises:
        InvalidTATConfigException: If hours are outside 0-23, start is not
            before end, the timezone is unknown, or skipping weekends would
            leave no working day.
    """

    office_start_hour: int = 9
    office_end_hour: int = 17
    timezone: str = "Asia/Kolkata"
    skip_weekends: bool = True
    weekend_days: tuple[int, ...] = field(default=DEFAULT_WEEKEND_DAYS)

    def __post_init__(self) -> None:
        _validate_hour(self.office_start_hour, "office_start_hour")
        _validate_hour(self.office_end_hour, "office_end_hour")
        if self.office_start_hour >= self.office_end_hour:
            raise InvalidTATConfigException(
                "Office end hour must be after start hour "
                f"(got start={self.office_start_hour}, end={self.office_end_hour})",
                field="office_end_hour",
            )
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise InvalidTATConfigException(
                f"Unknown timezone: {self.timezone!r}", field="timezone"
            ) from e
        # Normalize to a sorted tuple so equal configs compare equal.
        days = tuple(sorted(set(self.weekend_days)))
        for day in days:
            if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
                raise InvalidTATConfigException(
                    "weekend_days must contain weekday numbers 0 (Monday) to 6 (Sunday)",
                    field="weekend_days",
                )
        if self.skip_weekends and len(days) == 7:
            raise InvalidTATConfigException(
                "At least one working day is required when skip_weekends is enabled",
                field="weekend_days",
            )
        object.__setattr__(self, "weekend_days", days)

    @property
    def zone(self) -> ZoneInfo:
        """Return the ZoneInfo for this config's timezone."""
        return ZoneInfo(self.timezone)

    @property
    def office_hours(self) -> int:
        """Length of one working day in hours."""
        return self.office_end_hour - self.office_start_hour

    def is_weekend(self, day: date) -> bool:
        """Return whether the date is a skipped day (never when skip_weekends is off)."""
        return self.skip_weekends and day.weekday() in self.weekend_days
