"""Task instance domain entity.

A concrete step inside one running flow. Created by the workflow engine when
a flow advances; read-only for path building and scheduling.
"""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import TaskStatus


@dataclass
class TaskInstance:
    """Domain entity for a task instance within a flow."""

    task_name: str
    status: str
    planned_time: datetime | None = None
    actual_completion_time: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED.value

    def is_overdue(self, now: datetime) -> bool:
        """Return whether the task missed its planned time (completed late or still open)."""
        if self.planned_time is None:
            return False
        finished = self.actual_completion_time or now
        return finished > self.planned_time
