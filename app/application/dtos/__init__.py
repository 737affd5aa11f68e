"""Application DTOs (no ORM dependency)."""

from app.application.dtos.flow_rule import (
    BulkCreateResult,
    BulkRuleFailure,
    FlowRuleCreate,
)

__all__ = [
    "BulkCreateResult",
    "BulkRuleFailure",
    "FlowRuleCreate",
]
