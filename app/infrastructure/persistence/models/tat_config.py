"""TATConfigRecord ORM model. Office-hours calendar of one organization."""

from sqlalchemy import Boolean, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import OrganizationModel


class TATConfigRecord(OrganizationModel, Base):
    """TAT config row. Table: tat_config. Unique (organization_id)."""

    __tablename__ = "tat_config"

    office_start_hour: Mapped[int] = mapped_column(Integer, nullable=False)
    office_end_hour: Mapped[int] = mapped_column(Integer, nullable=False)
    timezone: Mapped[str] = mapped_column(String, nullable=False)
    skip_weekends: Mapped[bool] = mapped_column(Boolean, nullable=False)
    # Python weekday numbers (Monday=0 ... Sunday=6).
    weekend_days: Mapped[list[int]] = mapped_column(JSONB, nullable=False)

    __table_args__ = (
        UniqueConstraint("organization_id", name="uq_tat_config_organization"),
    )
