"""Turn-around-time (TAT) calculator: office-hours and weekend aware due dates.

Pure functions over (timestamp, duration, TATConfig). All arithmetic runs on
the wall clock of the config's timezone: aware inputs are converted into it,
naive inputs are taken as UTC. Results are aware datetimes in that zone.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from app.domain.enums import TATType
from app.domain.exceptions import ValidationException
from app.domain.value_objects.core import TATConfig
from app.shared.utils.datetime import to_local

logger = logging.getLogger(__name__)

# Upper bound for any TAT amount (hours or days).
MAX_TAT_VALUE = 365

_ONE_DAY = timedelta(days=1)
_ZERO = timedelta(0)


def _localize(timestamp: datetime, config: TATConfig) -> datetime:
    """Return timestamp on the config's wall clock (naive values are taken as UTC)."""
    return to_local(timestamp, config.zone)


def _at_hour(moment: datetime, hour: int) -> datetime:
    return moment.replace(hour=hour, minute=0, second=0, microsecond=0)


def _next_working_day_start(moment: datetime, config: TATConfig) -> datetime:
    """Return office opening on the first non-skipped day after moment's date."""
    day = moment + _ONE_DAY
    while config.is_weekend(day):
        day += _ONE_DAY
    return _at_hour(day, config.office_start_hour)


def hour_duration(start: datetime, hours: float, config: TATConfig) -> datetime:
    """Advance start by working hours, teleporting over closed hours and weekends.

    Within a working window the remaining duration is consumed up to closing
    time; whatever is left carries over to the next working day's opening.
    A duration that exactly fills the window also moves to the next opening,
    because the closing instant itself is not working time.

    A zero duration returns start unchanged (converted to the config zone),
    even outside working hours; use next_working_time to snap explicitly.

    Args:
        start: Start timestamp.
        hours: Non-negative working hours to add (may be fractional).
        config: Office-hours calendar.

    Returns:
        Aware datetime in config.timezone.
    """
    current = _localize(start, config)
    remaining = timedelta(hours=hours)
    while remaining > _ZERO:
        if config.is_weekend(current):
            current = _next_working_day_start(current, config)
            continue
        if current.hour < config.office_start_hour:
            current = _at_hour(current, config.office_start_hour)
            continue
        if current.hour >= config.office_end_hour:
            current = _next_working_day_start(current, config)
            continue
        left_today = _at_hour(current, config.office_end_hour) - current
        if remaining < left_today:
            current += remaining
            remaining = _ZERO
        else:
            remaining -= left_today
            current = _next_working_day_start(current, config)
    return current


def day_duration(start: datetime, days: int, config: TATConfig) -> datetime:
    """Advance start by working days, keeping the time of day."""
    result = _localize(start, config)
    added = 0
    while added < days:
        result += _ONE_DAY
        if not config.is_weekend(result):
            added += 1
    return result


def before_duration(start: datetime, days: int, config: TATConfig) -> datetime:
    """Walk back from start by working days; the result is set to office opening."""
    result = _localize(start, config)
    subtracted = 0
    while subtracted < days:
        result -= _ONE_DAY
        if not config.is_weekend(result):
            subtracted += 1
    return _at_hour(result, config.office_start_hour)


def specify_duration(start: datetime, hours: float, config: TATConfig) -> datetime:
    """Same office-hours arithmetic as hour_duration, kept as its own rule mode."""
    return hour_duration(start, hours, config)


def is_working_time(timestamp: datetime, config: TATConfig) -> bool:
    """Return True iff timestamp is on a working day within [start, end) office hours."""
    local = _localize(timestamp, config)
    if config.is_weekend(local):
        return False
    return config.office_start_hour <= local.hour < config.office_end_hour


def next_working_time(timestamp: datetime, config: TATConfig) -> datetime:
    """Return the earliest working instant at or after timestamp.

    If timestamp is already working time it is returned as given (same object).
    """
    if is_working_time(timestamp, config):
        return timestamp
    local = _localize(timestamp, config)
    if not config.is_weekend(local) and local.hour < config.office_start_hour:
        return _at_hour(local, config.office_start_hour)
    return _next_working_day_start(local, config)


_DISPATCH = {
    TATType.HOUR: hour_duration,
    TATType.DAY: day_duration,
    TATType.BEFORE: before_duration,
    TATType.SPECIFY: specify_duration,
}

_WHOLE_DAY_TYPES = frozenset({TATType.DAY, TATType.BEFORE})


def _validate_amount(amount: float) -> None:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise ValidationException("TAT must be a valid number", field="amount")
    if amount != amount:  # NaN
        raise ValidationException("TAT must be a valid number", field="amount")
    if amount < 0:
        raise ValidationException("TAT cannot be negative", field="amount")
    if amount > MAX_TAT_VALUE:
        raise ValidationException(
            f"TAT cannot exceed {MAX_TAT_VALUE}", field="amount"
        )


def calculate_tat(
    timestamp: datetime,
    amount: float,
    tat_type: str | TATType,
    config: TATConfig | None = None,
) -> datetime:
    """Compute the due date for a rule's TAT.

    tat_type is matched case-insensitively against hourtat, daytat, beforetat,
    specifytat (and the short aliases hour, day, before, specify). Unknown
    values fall back to hourtat.

    Args:
        timestamp: Start of the TAT (e.g. when the previous task completed).
        amount: TAT value; hours for hour/specify modes, days otherwise.
        tat_type: Calculation mode.
        config: Office-hours calendar; defaults to TATConfig().

    Returns:
        Aware datetime in the config's timezone.

    Raises:
        ValidationException: If timestamp is not a datetime or amount is
            negative, not a number, or above MAX_TAT_VALUE, or if a daytat or
            beforetat amount is not a whole number.
    """
    if not isinstance(timestamp, datetime):
        raise ValidationException(
            "Invalid timestamp provided to calculate_tat", field="timestamp"
        )
    _validate_amount(amount)
    config = config or TATConfig()
    resolved = tat_type if isinstance(tat_type, TATType) else TATType.lookup(tat_type)
    if resolved is None:
        logger.debug("Unknown tat_type %r, using %s", tat_type, TATType.HOUR.value)
        resolved = TATType.HOUR
    if resolved in _WHOLE_DAY_TYPES and amount != int(amount):
        raise ValidationException(
            f"{resolved.value} needs a whole number of days", field="amount"
        )
    logger.debug(
        "TAT calculation started: timestamp=%s amount=%s type=%s",
        timestamp.isoformat(),
        amount,
        resolved.value,
    )
    result = _DISPATCH[resolved](timestamp, amount, config)
    logger.debug(
        "TAT calculation completed: input=%s output=%s",
        timestamp.isoformat(),
        result.isoformat(),
    )
    return result


class TATCalculator:
    """Binds a TATConfig to the calculator functions (one organization's calendar)."""

    def __init__(self, config: TATConfig | None = None) -> None:
        self.config = config or TATConfig()

    def calculate(
        self, timestamp: datetime, amount: float, tat_type: str | TATType
    ) -> datetime:
        return calculate_tat(timestamp, amount, tat_type, self.config)

    def is_working_time(self, timestamp: datetime) -> bool:
        return is_working_time(timestamp, self.config)

    def next_working_time(self, timestamp: datetime) -> datetime:
        return next_working_time(timestamp, self.config)
