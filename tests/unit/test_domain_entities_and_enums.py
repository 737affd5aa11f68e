"""Tests for domain entities (FlowRule, TaskInstance) and enums."""

from datetime import datetime, timedelta, timezone

from app.domain.entities.flow_rule import RuleEdge
from app.domain.entities.task import TaskInstance
from app.domain.enums import MergeCondition, TATType, TaskStatus
from tests.conftest import make_rule

NOW = datetime(2025, 10, 15, 12, 0, tzinfo=timezone.utc)


class TestTATType:
    def test_values(self) -> None:
        assert TATType.values() == ["hourtat", "daytat", "beforetat", "specifytat"]

    def test_lookup_is_case_insensitive_with_aliases(self) -> None:
        assert TATType.lookup("HourTAT") is TATType.HOUR
        assert TATType.lookup(" day ") is TATType.DAY
        assert TATType.lookup("before") is TATType.BEFORE
        assert TATType.lookup("weeks") is None
        assert TATType.lookup(None) is None

    def test_parse_falls_back_to_hour(self) -> None:
        assert TATType.parse("specify") is TATType.SPECIFY
        assert TATType.parse("unknown") is TATType.HOUR


class TestFlowRule:
    def test_start_rule(self) -> None:
        assert make_rule("", "A").is_start
        assert not make_rule("A", "B").is_start

    def test_matches_with_and_without_status(self) -> None:
        rule = make_rule("Review", "Approve", "ok")
        assert rule.matches("Review")
        assert rule.matches("Review", "ok")
        assert not rule.matches("Review", "changes")
        assert not rule.matches("Approve")

    def test_edge(self) -> None:
        assert make_rule("A", "B", "done").edge() == RuleEdge("A", "done", "B")

    def test_resolved_tat_type(self) -> None:
        assert make_rule("A", "B", tat_type="DAY").resolved_tat_type is TATType.DAY
        assert make_rule("A", "B", tat_type="??").resolved_tat_type is TATType.HOUR

    def test_belongs_to_organization(self) -> None:
        rule = make_rule("A", "B", organization_id="org-1")
        assert rule.belongs_to_organization("org-1")
        assert not rule.belongs_to_organization("org-2")

    def test_waits_for_all(self) -> None:
        assert make_rule("A", "C").waits_for_all
        assert not make_rule("A", "C", merge_condition="any").waits_for_all
        assert make_rule("A", "C", merge_condition="").waits_for_all
        assert MergeCondition.values() == ["all", "any"]


class TestTaskInstance:
    def test_is_completed(self) -> None:
        assert TaskInstance("A", TaskStatus.COMPLETED.value).is_completed
        assert not TaskInstance("A", TaskStatus.PENDING.value).is_completed

    def test_overdue_when_open_past_planned_time(self) -> None:
        task = TaskInstance("A", "pending", planned_time=NOW - timedelta(hours=1))
        assert task.is_overdue(NOW)

    def test_not_overdue_when_completed_on_time(self) -> None:
        task = TaskInstance(
            "A",
            "completed",
            planned_time=NOW,
            actual_completion_time=NOW - timedelta(minutes=5),
        )
        assert not task.is_overdue(NOW + timedelta(days=1))

    def test_no_planned_time_is_never_overdue(self) -> None:
        assert not TaskInstance("A", "pending").is_overdue(NOW)
