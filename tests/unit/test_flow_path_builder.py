"""Tests for FlowPathBuilder (repeat counting, depth cap, status filter)."""

import pytest

from app.application.services.flow_path_builder import (
    FlowPath,
    FlowPathBuilder,
    FlowPathStep,
    find_start_rule,
    statuses_from_tasks,
)
from app.domain.entities.task import TaskInstance
from tests.conftest import make_rule


def _names(path: FlowPath) -> list[str]:
    return [s.task_name for s in path.steps]


def test_linear_flow() -> None:
    rules = [make_rule("", "A"), make_rule("A", "B"), make_rule("B", "C"), make_rule("C", "")]
    path = FlowPathBuilder().build_from_start(rules)
    assert path.steps == [FlowPathStep("A", 1), FlowPathStep("B", 1), FlowPathStep("C", 1)]
    assert path.has_cycles is False


def test_cycle_marks_second_visit() -> None:
    """A -> B -> A: A gets repeat numbers 1 then 2 and hasCycles is set."""
    rules = [make_rule("A", "B"), make_rule("B", "A")]
    path = FlowPathBuilder().build("A", rules)
    assert path.steps == [FlowPathStep("A", 1), FlowPathStep("B", 1), FlowPathStep("A", 2)]
    assert path.has_cycles is True
    assert path.repeat_counts() == {"A": 2, "B": 1}


def test_converging_branches_count_repeats_without_cycle() -> None:
    """Reaching D through two branches is a repeat but not a cycle."""
    rules = [
        make_rule("A", "B", "yes"),
        make_rule("A", "C", "no"),
        make_rule("B", "D"),
        make_rule("C", "D"),
    ]
    path = FlowPathBuilder().build("A", rules)
    assert _names(path) == ["A", "B", "D", "C", "D"]
    assert path.steps[-1].repeat_number == 2
    assert path.has_cycles is False


def test_depth_cap_bounds_long_chains() -> None:
    rules = [make_rule(f"T{i}", f"T{i + 1}") for i in range(20)]
    path = FlowPathBuilder(max_depth=5).build("T0", rules)
    assert _names(path) == ["T0", "T1", "T2", "T3", "T4"]


def test_chain_longer_than_recursion_limit() -> None:
    """A deep cap on a long chain stops at the end of the chain, not with an error."""
    rules = [make_rule(f"T{i}", f"T{i + 1}") for i in range(1500)]
    path = FlowPathBuilder(max_depth=2000).build("T0", rules)
    assert len(path.steps) == 1501
    assert path.steps[-1] == FlowPathStep("T1500", 1)
    assert not path.has_cycles


def test_status_filter_follows_matching_branch() -> None:
    rules = [
        make_rule("Review", "Approve", "ok"),
        make_rule("Review", "Fix", "changes"),
    ]
    path = FlowPathBuilder().build("Review", rules, {"Review": "changes"})
    assert _names(path) == ["Review", "Fix"]


def test_empty_start_and_missing_start_rule_give_empty_path() -> None:
    builder = FlowPathBuilder()
    assert builder.build("", [make_rule("A", "B")]).steps == []
    assert builder.build_from_start([make_rule("A", "B")]) == FlowPath()


def test_to_dict_is_camel_case() -> None:
    path = FlowPathBuilder().build("A", [make_rule("A", "B"), make_rule("B", "A")])
    assert path.to_dict() == {
        "path": [
            {"taskName": "A", "repeatNumber": 1},
            {"taskName": "B", "repeatNumber": 1},
            {"taskName": "A", "repeatNumber": 2},
        ],
        "hasCycles": True,
    }


def test_max_depth_must_be_positive() -> None:
    with pytest.raises(ValueError):
        FlowPathBuilder(max_depth=0)


def test_find_start_rule_returns_first() -> None:
    first = make_rule("", "A")
    rules = [make_rule("A", "B"), first, make_rule("", "Z")]
    assert find_start_rule(rules) is first
    assert find_start_rule([make_rule("A", "B")]) is None


def test_statuses_from_tasks_latest_wins_and_skips_empty() -> None:
    tasks = [
        TaskInstance(task_name="Review", status="changes"),
        TaskInstance(task_name="Fix", status=""),
        TaskInstance(task_name="Review", status="ok"),
    ]
    assert statuses_from_tasks(tasks) == {"Review": "ok"}
