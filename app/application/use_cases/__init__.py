"""Application use cases: one entry point per workflow."""

from app.application.use_cases.flow_rules import (
    CreateFlowRuleUseCase,
    CreateFlowRulesBulkUseCase,
    UpdateFlowRuleUseCase,
)
from app.application.use_cases.flows import GetFlowPathUseCase, ScheduleFlowUseCase
from app.application.use_cases.tat_config import (
    GetTATConfigUseCase,
    UpdateTATConfigUseCase,
)

__all__ = [
    "CreateFlowRuleUseCase",
    "CreateFlowRulesBulkUseCase",
    "GetFlowPathUseCase",
    "GetTATConfigUseCase",
    "ScheduleFlowUseCase",
    "UpdateFlowRuleUseCase",
    "UpdateTATConfigUseCase",
]
