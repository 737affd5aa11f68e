"""Create flow rule use case: cycle check against the system's rules, then persist."""

from __future__ import annotations

import logging

from app.application.dtos.flow_rule import FlowRuleCreate
from app.application.interfaces.repositories import IFlowRuleRepository
from app.application.services.cycle_detector import validate_no_cycle
from app.domain.entities.flow_rule import FlowRule
from app.domain.exceptions import CycleDetectedException

logger = logging.getLogger(__name__)


class CreateFlowRuleUseCase:
    """Creates a flow rule unless it would close a loop in its system."""

    def __init__(self, flow_rule_repo: IFlowRuleRepository) -> None:
        self._flow_rule_repo = flow_rule_repo

    async def execute(self, organization_id: str, data: FlowRuleCreate) -> FlowRule:
        """Validate and persist a rule.

        Args:
            organization_id: Owning organization.
            data: Rule fields.

        Returns:
            The created rule.

        Raises:
            CycleDetectedException: If the rule would create a circular workflow.
        """
        existing = await self._flow_rule_repo.list_for_system(
            organization_id, data.system
        )
        try:
            validate_no_cycle(existing, data)
        except CycleDetectedException as e:
            logger.warning(
                "Rejected cyclic flow rule: org=%s system=%s cycle=%s",
                organization_id,
                data.system,
                e.cycle,
            )
            raise
        rule = await self._flow_rule_repo.create_rule(organization_id, data)
        logger.info(
            "Flow rule created: id=%s org=%s system=%s %r/%r -> %r",
            rule.id,
            organization_id,
            rule.system,
            rule.current_task,
            rule.status,
            rule.next_task,
        )
        return rule
