"""Bulk create flow rules: partial success, each rule cycle-checked in order."""

from __future__ import annotations

import logging

from app.application.dtos.flow_rule import (
    BulkCreateResult,
    BulkRuleFailure,
    FlowRuleCreate,
)
from app.application.interfaces.repositories import IFlowRuleRepository
from app.application.services.cycle_detector import detect_cycle
from app.domain.entities.flow_rule import FlowRule
from app.domain.exceptions import ValidationException

logger = logging.getLogger(__name__)

DEFAULT_BULK_LIMIT = 100


class CreateFlowRulesBulkUseCase:
    """Creates many rules at once; invalid ones are reported, valid ones persisted.

    Each rule is checked against the persisted rules of its system plus the
    rules accepted earlier in the same batch, so two rules that only loop
    together are caught (the second one fails).
    """

    def __init__(
        self,
        flow_rule_repo: IFlowRuleRepository,
        max_rules: int = DEFAULT_BULK_LIMIT,
    ) -> None:
        self._flow_rule_repo = flow_rule_repo
        self._max_rules = max_rules

    async def execute(
        self, organization_id: str, items: list[FlowRuleCreate]
    ) -> BulkCreateResult:
        """Create the valid rules of items.

        Raises:
            ValidationException: If items is empty or longer than the limit.
        """
        if not items:
            raise ValidationException("Rules array must not be empty", field="rules")
        if len(items) > self._max_rules:
            raise ValidationException(
                f"Cannot create more than {self._max_rules} rules at once",
                field="rules",
            )

        snapshots: dict[str, list[FlowRule | FlowRuleCreate]] = {}
        created: list[FlowRule] = []
        failures: list[BulkRuleFailure] = []
        for index, item in enumerate(items):
            if item.system not in snapshots:
                snapshots[item.system] = list(
                    await self._flow_rule_repo.list_for_system(
                        organization_id, item.system
                    )
                )
            snapshot = snapshots[item.system]
            result = detect_cycle(snapshot, item)
            if result.has_cycle:
                failures.append(
                    BulkRuleFailure(
                        index=index,
                        error=result.message or "Circular dependency detected",
                        cycle=result.cycle,
                    )
                )
                continue
            rule = await self._flow_rule_repo.create_rule(organization_id, item)
            snapshot.append(rule)
            created.append(rule)

        if failures:
            logger.warning(
                "Bulk flow rule create: org=%s rejected %d of %d rule(s)",
                organization_id,
                len(failures),
                len(items),
            )
        logger.info(
            "Bulk flow rule create: org=%s created=%d",
            organization_id,
            len(created),
        )
        return BulkCreateResult(total=len(items), rules=created, failed_rules=failures)
