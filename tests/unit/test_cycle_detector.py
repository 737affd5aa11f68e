"""Tests for FlowRuleGraph, detect_cycle and validate_no_cycle."""

import pytest

from app.application.services.cycle_detector import (
    CycleDetectionResult,
    FlowRuleGraph,
    detect_cycle,
    validate_no_cycle,
)
from app.domain.entities.flow_rule import RuleEdge
from app.domain.exceptions import CycleDetectedException
from tests.conftest import make_rule


def test_self_loop_on_empty_graph() -> None:
    """A rule pointing at its own task is a cycle even without other rules."""
    result = detect_cycle([], RuleEdge(current_task="A", status="", next_task="A"))
    assert result.has_cycle is True
    assert result.cycle == ["A", "A"]
    assert result.message == (
        'Self-referencing rule detected: Task "A" points to itself. '
        "This would create an infinite loop."
    )


def test_two_step_cycle_already_present_is_reported() -> None:
    """Existing A->B and B->A: inserting A->B again reports B -> A -> B."""
    existing = [make_rule("A", "B", "done"), make_rule("B", "A", "done")]
    result = detect_cycle(existing, RuleEdge("A", "done", "B"))
    assert result.has_cycle is True
    assert result.cycle == ["B", "A", "B"]
    assert result.message == (
        "Circular dependency detected: B → A → B. "
        "This would create an infinite workflow loop."
    )


def test_closing_edge_creates_two_step_cycle() -> None:
    existing = [make_rule("A", "B")]
    result = detect_cycle(existing, RuleEdge("B", "", "A"))
    assert result.has_cycle is True
    assert result.cycle == ["A", "B", "A"]


def test_multi_step_cycle_path() -> None:
    """A->B->C->D plus D->B reports the loop from B."""
    existing = [make_rule("A", "B"), make_rule("B", "C"), make_rule("C", "D")]
    result = detect_cycle(existing, RuleEdge("D", "", "B"))
    assert result.cycle == ["B", "C", "D", "B"]


def test_linear_chain_is_acyclic() -> None:
    """Start -> A -> B -> C -> end has no cycle."""
    existing = [
        make_rule("", "A"),
        make_rule("A", "B", "done"),
        make_rule("B", "C", "done"),
    ]
    result = detect_cycle(existing, RuleEdge("C", "done", ""))
    assert result == CycleDetectionResult(has_cycle=False)
    assert result.cycle is None
    assert result.message is None


def test_loop_through_different_statuses_is_detected() -> None:
    """A loop is rejected whichever status triggers each step."""
    existing = [make_rule("A", "B", "approved")]
    result = detect_cycle(existing, RuleEdge("B", "rejected", "A"))
    assert result.has_cycle is True


def test_branches_without_loop_pass() -> None:
    existing = [
        make_rule("Review", "Approve", "ok"),
        make_rule("Review", "Fix", "changes"),
    ]
    assert not detect_cycle(existing, RuleEdge("Fix", "done", "Approve")).has_cycle


def test_start_rule_candidate_adds_no_edge() -> None:
    existing = [make_rule("A", "B")]
    assert not detect_cycle(existing, RuleEdge("", "", "A")).has_cycle


def test_detection_is_idempotent() -> None:
    """Same inputs give the same result; no state leaks between calls."""
    existing = [make_rule("A", "B"), make_rule("B", "C")]
    candidate = RuleEdge("C", "", "A")
    first = detect_cycle(existing, candidate)
    second = detect_cycle(existing, candidate)
    assert first == second
    assert first.cycle == ["A", "B", "C", "A"]


def test_to_dict_uses_camel_case_and_omits_unset() -> None:
    assert CycleDetectionResult(has_cycle=False).to_dict() == {"hasCycle": False}
    payload = CycleDetectionResult(has_cycle=True, cycle=["A", "A"], message="m").to_dict()
    assert payload == {"hasCycle": True, "cycle": ["A", "A"], "message": "m"}


def test_validate_no_cycle_raises_with_path() -> None:
    with pytest.raises(CycleDetectedException) as exc_info:
        validate_no_cycle([make_rule("A", "B")], RuleEdge("B", "", "A"))
    assert exc_info.value.error_code == "CYCLE_DETECTED"
    assert exc_info.value.cycle == ["A", "B", "A"]


def test_validate_no_cycle_passes_for_acyclic() -> None:
    validate_no_cycle([make_rule("A", "B")], RuleEdge("B", "", "C"))


class TestFlowRuleGraph:
    def test_neighbours_merge_statuses_in_insertion_order(self) -> None:
        graph = FlowRuleGraph(
            [
                make_rule("A", "B", "ok"),
                make_rule("A", "C", "no"),
                make_rule("A", "B", "maybe"),
            ]
        )
        assert list(graph.neighbours("A")) == ["B", "C", "B"]

    def test_start_and_end_rules_add_no_edges(self) -> None:
        graph = FlowRuleGraph([make_rule("", "A"), make_rule("A", "")])
        assert list(graph.neighbours("")) == []
        assert list(graph.neighbours("A")) == []

    def test_find_cycle_from_empty_start(self) -> None:
        assert FlowRuleGraph([make_rule("A", "A")]).find_cycle_from("") is None

    def test_diamond_is_not_a_cycle(self) -> None:
        """Two paths to the same task revisit it without a loop."""
        graph = FlowRuleGraph(
            [
                make_rule("A", "B"),
                make_rule("A", "C"),
                make_rule("B", "D"),
                make_rule("C", "D"),
            ]
        )
        assert graph.find_cycle_from("A") is None
