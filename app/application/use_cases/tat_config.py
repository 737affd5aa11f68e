"""TAT config use cases: read (stored or defaults) and replace."""

from __future__ import annotations

import logging

from app.application.interfaces.repositories import ITATConfigRepository
from app.domain.value_objects.core import TATConfig

logger = logging.getLogger(__name__)


class GetTATConfigUseCase:
    def __init__(
        self,
        tat_config_repo: ITATConfigRepository,
        default_config: TATConfig | None = None,
    ) -> None:
        self._tat_config_repo = tat_config_repo
        self._default_config = default_config or TATConfig()

    async def execute(self, organization_id: str) -> tuple[TATConfig, bool]:
        """Return (config, is_default); is_default when nothing is stored."""
        stored = await self._tat_config_repo.get_for_organization(organization_id)
        if stored is None:
            return self._default_config, True
        return stored, False


class UpdateTATConfigUseCase:
    def __init__(self, tat_config_repo: ITATConfigRepository) -> None:
        self._tat_config_repo = tat_config_repo

    async def execute(self, organization_id: str, config: TATConfig) -> TATConfig:
        """Store config for the organization (already validated by TATConfig)."""
        saved = await self._tat_config_repo.upsert(organization_id, config)
        logger.info(
            "TAT config updated: org=%s hours=%d-%d tz=%s skip_weekends=%s",
            organization_id,
            saved.office_start_hour,
            saved.office_end_hour,
            saved.timezone,
            saved.skip_weekends,
        )
        return saved
