"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.flow_rule import START_TASK, FlowRule, RuleEdge
from app.domain.entities.task import TaskInstance

__all__ = [
    "START_TASK",
    "FlowRule",
    "RuleEdge",
    "TaskInstance",
]
