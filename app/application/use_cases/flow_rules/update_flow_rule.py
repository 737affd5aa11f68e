"""Update flow rule use case: re-run cycle detection without the old version."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from app.application.interfaces.repositories import IFlowRuleRepository
from app.application.services.cycle_detector import validate_no_cycle
from app.domain.entities.flow_rule import FlowRule
from app.domain.exceptions import CycleDetectedException, ResourceNotFoundException

logger = logging.getLogger(__name__)

_GRAPH_FIELDS = frozenset({"system", "current_task", "status", "next_task"})


class UpdateFlowRuleUseCase:
    """Applies a partial update to a flow rule."""

    def __init__(self, flow_rule_repo: IFlowRuleRepository) -> None:
        self._flow_rule_repo = flow_rule_repo

    async def execute(
        self, organization_id: str, rule_id: str, changes: dict[str, Any]
    ) -> FlowRule:
        """Update the rule with changes (only the given fields).

        Raises:
            ResourceNotFoundException: If the rule is not in the organization.
            CycleDetectedException: If the updated rule would close a loop.
        """
        current = await self._flow_rule_repo.get_by_id_and_organization(
            rule_id, organization_id
        )
        if current is None:
            raise ResourceNotFoundException("flow_rule", rule_id)
        if not changes:
            return current

        updated = dataclasses.replace(current, **changes)
        if _GRAPH_FIELDS & changes.keys():
            others = [
                r
                for r in await self._flow_rule_repo.list_for_system(
                    organization_id, updated.system
                )
                if r.id != rule_id
            ]
            try:
                validate_no_cycle(others, updated)
            except CycleDetectedException as e:
                logger.warning(
                    "Rejected cyclic flow rule update: id=%s org=%s cycle=%s",
                    rule_id,
                    organization_id,
                    e.cycle,
                )
                raise

        saved = await self._flow_rule_repo.update_rule(organization_id, rule_id, changes)
        if saved is None:
            raise ResourceNotFoundException("flow_rule", rule_id)
        logger.info(
            "Flow rule updated: id=%s org=%s fields=%s",
            rule_id,
            organization_id,
            sorted(changes),
        )
        return saved
