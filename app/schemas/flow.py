"""Flow path and flow scheduling API schemas."""

from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from app.domain.entities.task import TaskInstance
from app.schemas.common import ensure_aware_datetime


class FlowPathStepResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    task_name: str = Field(..., serialization_alias="taskName")
    repeat_number: int = Field(..., serialization_alias="repeatNumber")


class FlowPathResponse(BaseModel):
    """Ordered visitation of a flow's tasks; hasCycles when an open task was revisited."""

    model_config = ConfigDict(populate_by_name=True)

    path: list[FlowPathStepResponse]
    has_cycles: bool = Field(..., serialization_alias="hasCycles")


class TaskInstanceRequest(BaseModel):
    """A task of a running (or simulated) flow instance."""

    task_name: str = Field(..., min_length=1, max_length=255)
    status: str = Field(default="", max_length=64)
    planned_time: AwareDatetime | None = None
    actual_completion_time: AwareDatetime | None = None

    @field_validator("planned_time", "actual_completion_time", mode="before")
    @classmethod
    def _times_aware(cls, v: Any) -> Any:
        return ensure_aware_datetime(v)

    def to_entity(self) -> TaskInstance:
        return TaskInstance(
            task_name=self.task_name,
            status=self.status,
            planned_time=self.planned_time,
            actual_completion_time=self.actual_completion_time,
        )


class StartFlowRequest(BaseModel):
    started_at: AwareDatetime

    @field_validator("started_at", mode="before")
    @classmethod
    def _started_at_aware(cls, v: Any) -> Any:
        return ensure_aware_datetime(v)


class NextStepsRequest(BaseModel):
    """A task completed with status at completed_at.

    tasks lists the flow instance's current tasks; a task fed by several
    rules is only created once its merge condition is met, and never twice.
    """

    task_name: str = Field(..., min_length=1, max_length=255)
    status: str = Field(default="", max_length=64)
    completed_at: AwareDatetime
    tasks: list[TaskInstanceRequest] = Field(default_factory=list)

    @field_validator("completed_at", mode="before")
    @classmethod
    def _completed_at_aware(cls, v: Any) -> Any:
        return ensure_aware_datetime(v)


class NextTaskAssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    task_name: str
    doer: str
    email: str
    planned_time: AwareDatetime
    form_id: str | None = None
    tat: int
    tat_type: str


class ScheduleRequest(BaseModel):
    """Project a due-date timeline; status_by_task picks the branch per task."""

    started_at: AwareDatetime
    status_by_task: dict[str, str] | None = None
    max_steps: int | None = Field(default=None, ge=1, le=100)

    @field_validator("started_at", mode="before")
    @classmethod
    def _started_at_aware(cls, v: Any) -> Any:
        return ensure_aware_datetime(v)


class ScheduledStepResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    task_name: str
    doer: str
    email: str
    starts_at: AwareDatetime
    due_at: AwareDatetime


class FlowPathRequest(BaseModel):
    """Walk a flow instance: each task follows the rule matching its latest status."""

    start_task: str | None = Field(default=None, max_length=255)
    tasks: list[TaskInstanceRequest] = Field(default_factory=list)
