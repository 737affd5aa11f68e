"""FlowRule repository. Returns domain FlowRule entities."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.flow_rule import FlowRuleCreate
from app.domain.entities.flow_rule import FlowRule
from app.infrastructure.persistence.models.flow_rule import FlowRule as FlowRuleModel
from app.infrastructure.persistence.repositories.base import BaseRepository


def _split_emails(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    return [e.strip() for e in raw.split(",") if e.strip()]


def _join_emails(emails: list[str] | None) -> str | None:
    if not emails:
        return None
    return ",".join(emails)


def _to_entity(r: FlowRuleModel) -> FlowRule:
    """Map ORM FlowRule row to the domain entity."""
    return FlowRule(
        id=r.id,
        organization_id=r.organization_id,
        system=r.system,
        current_task=r.current_task or "",
        status=r.status or "",
        next_task=r.next_task,
        tat=r.tat,
        tat_type=r.tat_type,
        doer=r.doer,
        email=r.email,
        form_id=r.form_id,
        transferable=r.transferable,
        transfer_to_emails=_split_emails(r.transfer_to_emails),
        merge_condition=r.merge_condition or "all",
    )


class FlowRuleRepository(BaseRepository[FlowRuleModel]):
    """Flow rule repository. Organization-scoped by query."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, FlowRuleModel)

    async def list_for_system(self, organization_id: str, system: str) -> list[FlowRule]:
        """Return every rule of one system in creation order."""
        result = await self.db.execute(
            select(FlowRuleModel)
            .where(
                FlowRuleModel.organization_id == organization_id,
                FlowRuleModel.system == system,
            )
            .order_by(FlowRuleModel.position.asc())
        )
        return [_to_entity(r) for r in result.scalars().all()]

    async def list_for_organization(
        self,
        organization_id: str,
        system: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[FlowRule]:
        """Return rules of the organization (optionally one system), by system then creation."""
        stmt = select(FlowRuleModel).where(
            FlowRuleModel.organization_id == organization_id
        )
        if system is not None:
            stmt = stmt.where(FlowRuleModel.system == system)
        result = await self.db.execute(
            stmt.order_by(FlowRuleModel.system.asc(), FlowRuleModel.position.asc())
            .offset(skip)
            .limit(limit)
        )
        return [_to_entity(r) for r in result.scalars().all()]

    async def get_entity_by_id(
        self, rule_id: str, organization_id: str
    ) -> FlowRuleModel | None:
        """Return ORM row by id within the organization, for update/delete."""
        result = await self.db.execute(
            select(FlowRuleModel).where(
                FlowRuleModel.id == rule_id,
                FlowRuleModel.organization_id == organization_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_id_and_organization(
        self, rule_id: str, organization_id: str
    ) -> FlowRule | None:
        """Return rule by id if it belongs to the organization."""
        row = await self.get_entity_by_id(rule_id, organization_id)
        return _to_entity(row) if row else None

    async def create_rule(self, organization_id: str, data: FlowRuleCreate) -> FlowRule:
        """Insert a rule."""
        row = FlowRuleModel(
            organization_id=organization_id,
            system=data.system,
            current_task=data.current_task or "",
            status=data.status or "",
            next_task=data.next_task,
            tat=data.tat,
            tat_type=data.tat_type,
            doer=data.doer,
            email=data.email,
            form_id=data.form_id,
            transferable=data.transferable,
            transfer_to_emails=_join_emails(data.transfer_to_emails),
            merge_condition=data.merge_condition,
        )
        created = await self.create(row)
        return _to_entity(created)

    async def update_rule(
        self, organization_id: str, rule_id: str, changes: dict[str, Any]
    ) -> FlowRule | None:
        """Apply changes; None when the rule is not in the organization."""
        row = await self.get_entity_by_id(rule_id, organization_id)
        if row is None:
            return None
        values = dict(changes)
        if "transfer_to_emails" in values:
            values["transfer_to_emails"] = _join_emails(values["transfer_to_emails"])
        updated = await self.update(row, values)
        return _to_entity(updated)

    async def delete_rule(self, organization_id: str, rule_id: str) -> bool:
        """Delete a rule; False when it is not in the organization."""
        row = await self.get_entity_by_id(rule_id, organization_id)
        if row is None:
            return False
        await self.delete(row)
        return True
