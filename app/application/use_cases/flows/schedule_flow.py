"""Schedule flow use case: planned times for starting and advancing a flow."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime

from app.application.interfaces.repositories import (
    IFlowRuleRepository,
    ITATConfigRepository,
)
from app.application.services.flow_scheduler import (
    DEFAULT_MAX_STEPS,
    FlowScheduler,
    NextTaskAssignment,
    ScheduledStep,
)
from app.application.services.tat_calculator import TATCalculator
from app.domain.entities.task import TaskInstance
from app.domain.value_objects.core import TATConfig


class ScheduleFlowUseCase:
    """Runs FlowScheduler with the organization's stored TAT config (or defaults)."""

    def __init__(
        self,
        flow_rule_repo: IFlowRuleRepository,
        tat_config_repo: ITATConfigRepository,
        default_config: TATConfig | None = None,
    ) -> None:
        self._flow_rule_repo = flow_rule_repo
        self._tat_config_repo = tat_config_repo
        self._default_config = default_config or TATConfig()

    async def _scheduler(self, organization_id: str) -> FlowScheduler:
        config = await self._tat_config_repo.get_for_organization(organization_id)
        return FlowScheduler(TATCalculator(config or self._default_config))

    async def start(
        self, organization_id: str, system: str, started_at: datetime
    ) -> NextTaskAssignment:
        """Return the first task of a new flow of system.

        Raises:
            ValidationException: If the system has no start rule.
        """
        rules = await self._flow_rule_repo.list_for_system(organization_id, system)
        scheduler = await self._scheduler(organization_id)
        return scheduler.start(rules, started_at)

    async def next_steps(
        self,
        organization_id: str,
        system: str,
        task_name: str,
        status: str,
        completed_at: datetime,
        tasks: Sequence[TaskInstance] = (),
    ) -> list[NextTaskAssignment]:
        """Return the tasks created when task_name completes with status.

        tasks are the flow instance's current tasks; they decide whether a
        parallel join is ready and whether its task already exists.
        """
        rules = await self._flow_rule_repo.list_for_system(organization_id, system)
        scheduler = await self._scheduler(organization_id)
        return scheduler.next_steps(rules, task_name, status, completed_at, tasks)

    async def project(
        self,
        organization_id: str,
        system: str,
        started_at: datetime,
        status_by_task: Mapping[str, str] | None = None,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> list[ScheduledStep]:
        """Return the projected due-date timeline of one branch of the flow."""
        rules = await self._flow_rule_repo.list_for_system(organization_id, system)
        scheduler = await self._scheduler(organization_id)
        return scheduler.project(rules, started_at, status_by_task, max_steps)
