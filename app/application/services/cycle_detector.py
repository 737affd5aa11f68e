"""Flow rule graph and cycle detection (rejects rules that would loop a workflow).

The graph is rebuilt from the full rule list of one system on every call and
never cached: a stale graph would silently let cycles through.

Example cycles:
    - Self-reference: A -> A
    - Two-step: A -> B -> A
    - Multi-step: A -> B -> C -> D -> B
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Protocol

from app.domain.exceptions import CycleDetectedException


class RuleLike(Protocol):
    """Anything with the three graph fields of a flow rule."""

    current_task: str | None
    status: str | None
    next_task: str | None


@dataclass(frozen=True)
class CycleDetectionResult:
    """Outcome of a cycle check. cycle and message are set only when has_cycle."""

    has_cycle: bool
    cycle: list[str] | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return camelCase payload (hasCycle, cycle, message) omitting unset keys."""
        payload: dict[str, Any] = {"hasCycle": self.has_cycle}
        if self.cycle is not None:
            payload["cycle"] = list(self.cycle)
        if self.message is not None:
            payload["message"] = self.message
        return payload


def _edge(rule: RuleLike) -> tuple[str, str, str]:
    return (rule.current_task or "", rule.status or "", rule.next_task or "")


class FlowRuleGraph:
    """Adjacency map (current_task, status) -> ordered set of next tasks.

    Keying by status keeps conditional branches apart, while neighbours()
    merges all statuses of a task: a loop through a task is dangerous
    whichever status triggered it. Start rules (empty current task) add no
    key and empty next tasks add no edge.
    """

    def __init__(self, rules: Iterable[RuleLike] = ()) -> None:
        # dict[str, None] keeps insertion order, so reported cycles are deterministic.
        self._edges: dict[tuple[str, str], dict[str, None]] = {}
        for rule in rules:
            self.add(rule)

    def add(self, rule: RuleLike) -> None:
        current, status, next_task = _edge(rule)
        if not current:
            return
        targets = self._edges.setdefault((current, status), {})
        if next_task:
            targets[next_task] = None

    def neighbours(self, task: str) -> Iterator[str]:
        """Yield next tasks reachable from task under any status, in insertion order."""
        for (current, _status), targets in self._edges.items():
            if current == task:
                yield from targets

    def find_cycle_from(self, start: str) -> list[str] | None:
        """Depth-first search from start; return the first loop found, or None.

        Iterative DFS over (task, neighbour iterator) frames; visits neighbours
        in the same order as the recursive formulation. The returned path
        starts and ends with the task that closes the loop.
        """
        if not start:
            return None
        visited: set[str] = set()
        on_stack: set[str] = set()
        path: list[str] = []
        frames: list[tuple[str, Iterator[str]]] = []

        def enter(task: str) -> None:
            visited.add(task)
            on_stack.add(task)
            path.append(task)
            frames.append((task, self.neighbours(task)))

        enter(start)
        while frames:
            task, pending = frames[-1]
            for neighbour in pending:
                if neighbour not in visited:
                    enter(neighbour)
                    break
                if neighbour in on_stack:
                    start_index = path.index(neighbour)
                    return path[start_index:] + [neighbour]
            else:
                frames.pop()
                on_stack.discard(task)
                path.pop()
        return None


def detect_cycle(
    existing_rules: Iterable[RuleLike], candidate: RuleLike
) -> CycleDetectionResult:
    """Decide whether adding candidate to existing_rules creates a reachable loop.

    Args:
        existing_rules: All persisted rules of the candidate's system, any order.
        candidate: The rule about to be inserted (current_task, status, next_task).

    Returns:
        CycleDetectionResult; when has_cycle, cycle is the loop path and
        message is ready to show to the end user.
    """
    current, _status, next_task = _edge(candidate)
    if current and current == next_task:
        return CycleDetectionResult(
            has_cycle=True,
            cycle=[current, next_task],
            message=(
                f'Self-referencing rule detected: Task "{current}" points to itself. '
                "This would create an infinite loop."
            ),
        )

    graph = FlowRuleGraph(existing_rules)
    graph.add(candidate)
    cycle = graph.find_cycle_from(next_task)
    if cycle is None:
        return CycleDetectionResult(has_cycle=False)
    return CycleDetectionResult(
        has_cycle=True,
        cycle=cycle,
        message=(
            f"Circular dependency detected: {' → '.join(cycle)}. "
            "This would create an infinite workflow loop."
        ),
    )


def validate_no_cycle(existing_rules: Iterable[RuleLike], candidate: RuleLike) -> None:
    """Raise CycleDetectedException when candidate would close a loop."""
    result = detect_cycle(existing_rules, candidate)
    if result.has_cycle:
        raise CycleDetectedException(
            result.message or "Circular dependency detected",
            result.cycle or [],
        )
