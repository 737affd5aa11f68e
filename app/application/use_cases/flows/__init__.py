"""Flow use cases: path walking and due-date scheduling."""

from app.application.use_cases.flows.get_flow_path import GetFlowPathUseCase
from app.application.use_cases.flows.schedule_flow import ScheduleFlowUseCase

__all__ = [
    "GetFlowPathUseCase",
    "ScheduleFlowUseCase",
]
