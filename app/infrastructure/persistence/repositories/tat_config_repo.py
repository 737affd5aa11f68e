"""TAT config repository. Returns TATConfig value objects."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.value_objects.core import TATConfig
from app.infrastructure.persistence.models.tat_config import TATConfigRecord
from app.infrastructure.persistence.repositories.base import BaseRepository


def _to_value(r: TATConfigRecord) -> TATConfig:
    """Map ORM row to TATConfig (validates again, so bad rows fail loudly)."""
    return TATConfig(
        office_start_hour=r.office_start_hour,
        office_end_hour=r.office_end_hour,
        timezone=r.timezone,
        skip_weekends=r.skip_weekends,
        weekend_days=tuple(r.weekend_days or ()),
    )


class TATConfigRepository(BaseRepository[TATConfigRecord]):
    """One TAT config row per organization."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TATConfigRecord)

    async def _get_row(self, organization_id: str) -> TATConfigRecord | None:
        result = await self.db.execute(
            select(TATConfigRecord).where(
                TATConfigRecord.organization_id == organization_id
            )
        )
        return result.scalar_one_or_none()

    async def get_for_organization(self, organization_id: str) -> TATConfig | None:
        """Return the organization's config, or None when it uses defaults."""
        row = await self._get_row(organization_id)
        return _to_value(row) if row else None

    async def upsert(self, organization_id: str, config: TATConfig) -> TATConfig:
        """Create or replace the organization's config."""
        values = {
            "office_start_hour": config.office_start_hour,
            "office_end_hour": config.office_end_hour,
            "timezone": config.timezone,
            "skip_weekends": config.skip_weekends,
            "weekend_days": list(config.weekend_days),
        }
        row = await self._get_row(organization_id)
        if row is None:
            row = await self.create(
                TATConfigRecord(organization_id=organization_id, **values)
            )
        else:
            row = await self.update(row, values)
        return _to_value(row)
