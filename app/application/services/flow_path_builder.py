"""Flow path builder: the ordered task sequence a flow would visit, with repeat counts.

A display aid, not an execution engine. Rules created through the API are
cycle-free, but older data may predate cycle validation, so the walk marks
revisited tasks and is bounded by a depth cap.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from app.domain.entities.flow_rule import FlowRule
from app.domain.entities.task import TaskInstance

DEFAULT_MAX_DEPTH = 100


@dataclass(frozen=True)
class FlowPathStep:
    """One visit of a task; repeat_number is 1 on first visit, 2 on the second, ..."""

    task_name: str
    repeat_number: int


@dataclass(frozen=True)
class FlowPath:
    """Flattened visitation order plus whether any open task was revisited."""

    steps: list[FlowPathStep] = field(default_factory=list)
    has_cycles: bool = False

    def repeat_counts(self) -> dict[str, int]:
        """Return the highest repeat number seen per task (first-visit order)."""
        counts: dict[str, int] = {}
        for step in self.steps:
            counts[step.task_name] = max(counts.get(step.task_name, 0), step.repeat_number)
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": [
                {"taskName": s.task_name, "repeatNumber": s.repeat_number}
                for s in self.steps
            ],
            "hasCycles": self.has_cycles,
        }


def statuses_from_tasks(tasks: Iterable[TaskInstance]) -> dict[str, str]:
    """Return task name -> status of its latest instance (later items win)."""
    return {task.task_name: task.status for task in tasks if task.status}


def find_start_rule(rules: Sequence[FlowRule]) -> FlowRule | None:
    """Return the first start rule (empty current task), or None."""
    for rule in rules:
        if rule.is_start:
            return rule
    return None


class FlowPathBuilder:
    """Depth-first walk over a system's rules, counting task occurrences.

    Every branch of a task is expanded (one branch per matching rule), so a
    tree-shaped traversal is flattened into one sequence in visitation order.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth

    def build(
        self,
        start_task: str,
        rules: Sequence[FlowRule],
        status_by_task: Mapping[str, str] | None = None,
    ) -> FlowPath:
        """Walk from start_task.

        Args:
            start_task: Task to start from; an empty name yields an empty path.
            rules: Rules of one system.
            status_by_task: Optional per-task status filter; for a task listed
                here only rules with that status are followed.

        Returns:
            FlowPath with repeat numbers and the has_cycles flag.
        """
        statuses = status_by_task or {}
        steps: list[FlowPathStep] = []
        occurrences: dict[str, int] = {}
        open_tasks: set[str] = set()
        has_cycles = False
        # (task, depth, pending next tasks) frames; depth is bounded by max_depth,
        # not by the recursion limit.
        frames: list[tuple[str, int, Iterator[str]]] = []

        def visit(task_name: str, depth: int) -> None:
            nonlocal has_cycles
            if not task_name or depth >= self.max_depth:
                return
            count = occurrences.get(task_name, 0) + 1
            occurrences[task_name] = count
            steps.append(FlowPathStep(task_name, count))
            if task_name in open_tasks:
                has_cycles = True
                return
            open_tasks.add(task_name)
            status = statuses.get(task_name)
            next_tasks = [
                rule.next_task
                for rule in rules
                if rule.matches(task_name, status) and rule.next_task
            ]
            frames.append((task_name, depth, iter(next_tasks)))

        visit(start_task, 0)
        while frames:
            task_name, depth, pending = frames[-1]
            next_task = next(pending, None)
            if next_task is None:
                frames.pop()
                open_tasks.discard(task_name)
                continue
            visit(next_task, depth + 1)
        return FlowPath(steps=steps, has_cycles=has_cycles)

    def build_from_start(
        self,
        rules: Sequence[FlowRule],
        status_by_task: Mapping[str, str] | None = None,
    ) -> FlowPath:
        """Walk from the start rule's next task; empty path when there is no start rule."""
        start_rule = find_start_rule(rules)
        if start_rule is None or not start_rule.next_task:
            return FlowPath()
        return self.build(start_rule.next_task, rules, status_by_task)
