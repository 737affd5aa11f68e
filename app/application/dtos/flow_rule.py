"""DTOs for flow rule use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.domain.entities.flow_rule import FlowRule


@dataclass(frozen=True)
class FlowRuleCreate:
    """Fields of a new flow rule. Empty current_task makes it the start rule."""

    system: str
    next_task: str
    tat: int
    tat_type: str
    doer: str
    email: str
    current_task: str = ""
    status: str = ""
    form_id: str | None = None
    transferable: bool = False
    transfer_to_emails: list[str] | None = None
    merge_condition: str = "all"


@dataclass(frozen=True)
class BulkRuleFailure:
    """A rule of a bulk request that was not created."""

    index: int
    error: str
    cycle: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"index": self.index, "error": self.error}
        if self.cycle is not None:
            payload["cycle"] = list(self.cycle)
        return payload


@dataclass(frozen=True)
class BulkCreateResult:
    """Outcome of a bulk create: valid rules persisted, failures collected."""

    total: int
    rules: list[FlowRule] = field(default_factory=list)
    failed_rules: list[BulkRuleFailure] = field(default_factory=list)

    @property
    def created(self) -> int:
        return len(self.rules)

    @property
    def failed(self) -> int:
        return len(self.failed_rules)
