"""Flow rule use cases: create (with cycle detection), bulk create, update."""

from app.application.use_cases.flow_rules.create_flow_rule import CreateFlowRuleUseCase
from app.application.use_cases.flow_rules.create_flow_rules_bulk import (
    CreateFlowRulesBulkUseCase,
)
from app.application.use_cases.flow_rules.update_flow_rule import UpdateFlowRuleUseCase

__all__ = [
    "CreateFlowRuleUseCase",
    "CreateFlowRulesBulkUseCase",
    "UpdateFlowRuleUseCase",
]
