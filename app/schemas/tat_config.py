"""TAT config and TAT calculation API schemas."""

from typing import Any

from pydantic import AwareDatetime, BaseModel, Field, field_validator

from app.domain.value_objects.core import DEFAULT_WEEKEND_DAYS, TATConfig
from app.schemas.common import ensure_aware_datetime


class TATConfigRequest(BaseModel):
    """Office-hours calendar. Cross-field rules (start < end, timezone) are domain-checked."""

    office_start_hour: int = Field(default=9, ge=0, le=23)
    office_end_hour: int = Field(default=17, ge=0, le=23)
    timezone: str = Field(default="Asia/Kolkata", min_length=1, max_length=64)
    skip_weekends: bool = True
    weekend_days: list[int] = Field(
        default_factory=lambda: list(DEFAULT_WEEKEND_DAYS),
        description="Weekday numbers, Monday=0 ... Sunday=6",
    )

    @field_validator("weekend_days")
    @classmethod
    def _weekdays_in_range(cls, v: list[int]) -> list[int]:
        if any(d < 0 or d > 6 for d in v):
            raise ValueError("weekend_days must contain numbers 0 (Monday) to 6 (Sunday)")
        return v

    def to_value(self) -> TATConfig:
        """Build the TATConfig (raises InvalidTATConfigException)."""
        return TATConfig(
            office_start_hour=self.office_start_hour,
            office_end_hour=self.office_end_hour,
            timezone=self.timezone,
            skip_weekends=self.skip_weekends,
            weekend_days=tuple(self.weekend_days),
        )


class TATConfigResponse(BaseModel):
    """TAT config of an organization; is_default when nothing is stored."""

    office_start_hour: int
    office_end_hour: int
    timezone: str
    skip_weekends: bool
    weekend_days: list[int]
    is_default: bool = False

    @classmethod
    def from_value(cls, config: TATConfig, is_default: bool = False) -> "TATConfigResponse":
        return cls(
            office_start_hour=config.office_start_hour,
            office_end_hour=config.office_end_hour,
            timezone=config.timezone,
            skip_weekends=config.skip_weekends,
            weekend_days=list(config.weekend_days),
            is_default=is_default,
        )


class TATCalculateRequest(BaseModel):
    """Compute a due date. Without config, the organization's stored config is used."""

    timestamp: AwareDatetime
    amount: float = Field(..., description="Hours (hourtat/specifytat) or days (daytat/beforetat)")
    tat_type: str = Field(default="hourtat", description="Unknown values fall back to hourtat")
    config: TATConfigRequest | None = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def _timestamp_aware(cls, v: Any) -> Any:
        return ensure_aware_datetime(v)


class TATCalculateResponse(BaseModel):
    due_at: AwareDatetime
    tat_type: str
    timezone: str
