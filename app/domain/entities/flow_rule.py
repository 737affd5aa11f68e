"""Flow rule domain entity.

A flow rule is one transition of a workflow definition ("system"):
when ``current_task`` completes with ``status``, ``next_task`` is created and
assigned to ``doer``/``email``, due after ``tat`` according to ``tat_type``.
An empty ``current_task`` marks the start rule; an empty ``next_task`` ends
the flow. When several rules share a next_task, merge_condition decides
whether the joined task waits for all of them.
"""

from dataclasses import dataclass

from app.domain.enums import MergeCondition, TATType

START_TASK = ""


@dataclass(frozen=True)
class RuleEdge:
    """The graph-relevant part of a flow rule (a candidate for cycle checks)."""

    current_task: str
    status: str
    next_task: str


@dataclass
class FlowRule:
    """Domain entity for a flow rule (transition + assignment + TAT)."""

    id: str
    organization_id: str
    system: str
    current_task: str
    status: str
    next_task: str
    tat: int
    tat_type: str
    doer: str
    email: str
    form_id: str | None = None
    transferable: bool = False
    transfer_to_emails: list[str] | None = None
    merge_condition: str = MergeCondition.ALL.value

    @property
    def is_start(self) -> bool:
        """Return whether this is the synthetic start rule of its system."""
        return (self.current_task or START_TASK) == START_TASK

    @property
    def resolved_tat_type(self) -> TATType:
        """Return the TAT mode, falling back to HOUR for unknown values."""
        return TATType.parse(self.tat_type)

    def edge(self) -> RuleEdge:
        """Return the (current_task, status) -> next_task edge of this rule."""
        return RuleEdge(
            current_task=self.current_task or "",
            status=self.status or "",
            next_task=self.next_task or "",
        )

    def matches(self, task_name: str, status: str | None = None) -> bool:
        """Return whether this rule fires for task_name (and status, when given)."""
        if (self.current_task or "") != task_name:
            return False
        return status is None or (self.status or "") == status

    def belongs_to_organization(self, organization_id: str) -> bool:
        """Return whether this rule belongs to the given organization."""
        return self.organization_id == organization_id

    @property
    def waits_for_all(self) -> bool:
        """Return whether a join on next_task waits for every prerequisite."""
        condition = self.merge_condition or MergeCondition.ALL.value
        return condition == MergeCondition.ALL.value
