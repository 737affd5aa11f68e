"""Get flow path use case: the task sequence a system's flow would visit."""

from __future__ import annotations

from collections.abc import Mapping

from app.application.interfaces.repositories import IFlowRuleRepository
from app.application.services.flow_path_builder import FlowPath, FlowPathBuilder


class GetFlowPathUseCase:
    """Loads a system's rules and walks them with FlowPathBuilder."""

    def __init__(
        self,
        flow_rule_repo: IFlowRuleRepository,
        builder: FlowPathBuilder | None = None,
    ) -> None:
        self._flow_rule_repo = flow_rule_repo
        self._builder = builder or FlowPathBuilder()

    async def execute(
        self,
        organization_id: str,
        system: str,
        start_task: str | None = None,
        status_by_task: Mapping[str, str] | None = None,
    ) -> FlowPath:
        """Walk from start_task, or from the start rule when start_task is not given.

        A system without rules (or without a start rule) yields an empty path.
        """
        rules = await self._flow_rule_repo.list_for_system(organization_id, system)
        if start_task:
            return self._builder.build(start_task, rules, status_by_task)
        return self._builder.build_from_start(rules, status_by_task)
