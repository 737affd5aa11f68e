"""Pydantic request/response schemas for the API."""

from app.schemas.flow import (
    FlowPathRequest,
    FlowPathResponse,
    NextStepsRequest,
    NextTaskAssignmentResponse,
    ScheduledStepResponse,
    ScheduleRequest,
    StartFlowRequest,
)
from app.schemas.flow_rule import (
    CycleCheckResponse,
    FlowRuleBulkCreateRequest,
    FlowRuleBulkCreateResponse,
    FlowRuleCreateRequest,
    FlowRuleResponse,
    FlowRuleUpdate,
    FlowRuleValidateRequest,
)
from app.schemas.health import HealthResponse
from app.schemas.tat_config import (
    TATCalculateRequest,
    TATCalculateResponse,
    TATConfigRequest,
    TATConfigResponse,
)

__all__ = [
    "CycleCheckResponse",
    "FlowPathRequest",
    "FlowPathResponse",
    "FlowRuleBulkCreateRequest",
    "FlowRuleBulkCreateResponse",
    "FlowRuleCreateRequest",
    "FlowRuleResponse",
    "FlowRuleUpdate",
    "FlowRuleValidateRequest",
    "HealthResponse",
    "NextStepsRequest",
    "NextTaskAssignmentResponse",
    "ScheduleRequest",
    "ScheduledStepResponse",
    "StartFlowRequest",
    "TATCalculateRequest",
    "TATCalculateResponse",
    "TATConfigRequest",
    "TATConfigResponse",
]
