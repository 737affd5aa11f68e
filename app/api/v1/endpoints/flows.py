"""Flow API: path walking and due-date scheduling over a system's rules."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import (
    get_flow_path_use_case,
    get_organization_id,
    get_schedule_flow_use_case,
)
from app.application.services.flow_path_builder import FlowPath, statuses_from_tasks
from app.application.use_cases.flows import GetFlowPathUseCase, ScheduleFlowUseCase
from app.core.config import get_settings
from app.schemas.flow import (
    FlowPathRequest,
    FlowPathResponse,
    FlowPathStepResponse,
    NextStepsRequest,
    NextTaskAssignmentResponse,
    ScheduledStepResponse,
    ScheduleRequest,
    StartFlowRequest,
)

router = APIRouter()


def _path_response(path: FlowPath) -> FlowPathResponse:
    return FlowPathResponse(
        path=[
            FlowPathStepResponse(task_name=s.task_name, repeat_number=s.repeat_number)
            for s in path.steps
        ],
        has_cycles=path.has_cycles,
    )


@router.get("/{system}/path", response_model=FlowPathResponse)
async def get_flow_path(
    system: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    path_uc: Annotated[GetFlowPathUseCase, Depends(get_flow_path_use_case)],
    start_task: str | None = Query(None, max_length=255),
):
    """Walk the flow from start_task (or from the start rule) with repeat counts."""
    path = await path_uc.execute(organization_id, system, start_task=start_task)
    return _path_response(path)


@router.post("/{system}/path", response_model=FlowPathResponse)
async def walk_flow_instance(
    system: str,
    body: FlowPathRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    path_uc: Annotated[GetFlowPathUseCase, Depends(get_flow_path_use_case)],
):
    """Walk the flow following, for each task, the rule matching its latest instance status."""
    statuses = statuses_from_tasks(t.to_entity() for t in body.tasks)
    path = await path_uc.execute(
        organization_id, system, start_task=body.start_task, status_by_task=statuses
    )
    return _path_response(path)


@router.post("/{system}/start", response_model=NextTaskAssignmentResponse)
async def start_flow(
    system: str,
    body: StartFlowRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    schedule_uc: Annotated[ScheduleFlowUseCase, Depends(get_schedule_flow_use_case)],
):
    """Return the first task of a new flow with its planned time."""
    assignment = await schedule_uc.start(organization_id, system, body.started_at)
    return NextTaskAssignmentResponse.model_validate(assignment)


@router.post("/{system}/next-steps", response_model=list[NextTaskAssignmentResponse])
async def next_steps(
    system: str,
    body: NextStepsRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    schedule_uc: Annotated[ScheduleFlowUseCase, Depends(get_schedule_flow_use_case)],
):
    """Return the tasks created when task_name completes with status (empty: flow ends)."""
    assignments = await schedule_uc.next_steps(
        organization_id,
        system,
        body.task_name,
        body.status,
        body.completed_at,
        tasks=[t.to_entity() for t in body.tasks],
    )
    return [NextTaskAssignmentResponse.model_validate(a) for a in assignments]


@router.post("/{system}/schedule", response_model=list[ScheduledStepResponse])
async def schedule_flow(
    system: str,
    body: ScheduleRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    schedule_uc: Annotated[ScheduleFlowUseCase, Depends(get_schedule_flow_use_case)],
):
    """Project due dates along one branch of the flow."""
    steps = await schedule_uc.project(
        organization_id,
        system,
        body.started_at,
        status_by_task=body.status_by_task,
        max_steps=body.max_steps or get_settings().schedule_max_steps,
    )
    return [ScheduledStepResponse.model_validate(s) for s in steps]
