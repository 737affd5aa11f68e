"""Flow scheduler: who does what next, and by when.

Composes the rule list of one system with the TAT calculator. Used when a
flow starts, when a task completes, and to project a due-date timeline for a
whole flow without running it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

from app.application.services.flow_path_builder import find_start_rule
from app.application.services.tat_calculator import TATCalculator
from app.domain.entities.flow_rule import FlowRule
from app.domain.entities.task import TaskInstance
from app.domain.enums import TaskStatus
from app.domain.exceptions import ValidationException

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 10


@dataclass(frozen=True)
class NextTaskAssignment:
    """A task to create: assignee, form, and the planned (due) time."""

    task_name: str
    doer: str
    email: str
    planned_time: datetime
    form_id: str | None
    tat: int
    tat_type: str


@dataclass(frozen=True)
class ScheduledStep:
    """One step of a projected timeline."""

    task_name: str
    doer: str
    email: str
    starts_at: datetime
    due_at: datetime


class FlowScheduler:
    """Computes assignments and planned times from flow rules."""

    def __init__(self, calculator: TATCalculator | None = None) -> None:
        self.calculator = calculator or TATCalculator()

    def _assign(self, rule: FlowRule, moment: datetime) -> NextTaskAssignment:
        return NextTaskAssignment(
            task_name=rule.next_task,
            doer=rule.doer,
            email=rule.email,
            planned_time=self.calculator.calculate(moment, rule.tat, rule.tat_type),
            form_id=rule.form_id,
            tat=rule.tat,
            tat_type=rule.tat_type,
        )

    def start(self, rules: Sequence[FlowRule], started_at: datetime) -> NextTaskAssignment:
        """Return the first task of a new flow instance.

        Raises:
            ValidationException: If the system has no start rule.
        """
        start_rule = find_start_rule(rules)
        if start_rule is None or not start_rule.next_task:
            raise ValidationException("No starting rule found for this system")
        return self._assign(start_rule, started_at)

    def next_steps(
        self,
        rules: Sequence[FlowRule],
        task_name: str,
        status: str,
        completed_at: datetime,
        tasks: Sequence[TaskInstance] = (),
    ) -> list[NextTaskAssignment]:
        """Return one assignment per rule fired by task_name completing with status.

        Several matches mean parallel branches; no match means the flow ends
        on this branch. A next task fed by more than one rule is a join:
        with merge condition "all" (the default, and the stricter one wins
        when the rules disagree) it is created only once every prerequisite
        task has a completed instance in tasks; with "any" the first
        completion proceeds. Either way a join task that already has a
        non-cancelled instance is not created again. task_name itself
        counts as completed.
        """
        completed = {t.task_name for t in tasks if t.is_completed} | {task_name}
        existing = {
            t.task_name for t in tasks if t.status != TaskStatus.CANCELLED.value
        }
        assignments: list[NextTaskAssignment] = []
        for rule in rules:
            if rule.is_start or not rule.next_task:
                continue
            if not rule.matches(task_name, status):
                continue
            if not self._join_ready(rules, rule, completed, existing):
                continue
            assignments.append(self._assign(rule, completed_at))
            existing.add(rule.next_task)
        logger.debug(
            "Task %r completed with status %r: %d next task(s)",
            task_name,
            status,
            len(assignments),
        )
        return assignments

    @staticmethod
    def _join_ready(
        rules: Sequence[FlowRule],
        rule: FlowRule,
        completed: set[str],
        existing: set[str],
    ) -> bool:
        prerequisites = [
            r for r in rules if not r.is_start and r.next_task == rule.next_task
        ]
        if len(prerequisites) < 2:
            return True
        if any(r.waits_for_all for r in prerequisites):
            waiting = {r.current_task for r in prerequisites} - completed
            if waiting:
                logger.debug(
                    "Join %r waiting for %s", rule.next_task, ", ".join(sorted(waiting))
                )
                return False
        if rule.next_task in existing:
            logger.debug("Join %r already has an open task", rule.next_task)
            return False
        return True

    def project(
        self,
        rules: Sequence[FlowRule],
        started_at: datetime,
        status_by_task: Mapping[str, str] | None = None,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> list[ScheduledStep]:
        """Project a due-date timeline along one branch of the flow.

        For each task the rule matching status_by_task[task] is followed when
        given, else the first rule of that task. Each task starts when the
        previous one falls due. Stops at the end of the flow, after max_steps
        steps, or before a task would repeat.

        Raises:
            ValidationException: If the system has no start rule or max_steps < 1.
        """
        if max_steps < 1:
            raise ValidationException("max_steps must be at least 1", field="max_steps")
        statuses = status_by_task or {}
        start_rule = find_start_rule(rules)
        if start_rule is None or not start_rule.next_task:
            raise ValidationException("No starting rule found for this system")

        steps: list[ScheduledStep] = []
        seen: set[str] = set()
        rule: FlowRule | None = start_rule
        moment = started_at
        while rule is not None and len(steps) < max_steps:
            task = rule.next_task
            if not task or task in seen:
                break
            seen.add(task)
            due = self.calculator.calculate(moment, rule.tat, rule.tat_type)
            steps.append(
                ScheduledStep(
                    task_name=task,
                    doer=rule.doer,
                    email=rule.email,
                    starts_at=moment,
                    due_at=due,
                )
            )
            moment = due
            rule = next(
                (r for r in rules if not r.is_start and r.matches(task, statuses.get(task))),
                None,
            )
        return steps
