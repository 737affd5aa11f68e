"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import START_TASK, FlowRule, RuleEdge, TaskInstance
from app.domain.enums import TaskStatus, TATType
from app.domain.exceptions import (
    CycleDetectedException,
    FlowSenseException,
    InvalidTATConfigException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)
from app.domain.value_objects import TATConfig

__all__ = [
    # Entities
    "START_TASK",
    "FlowRule",
    "RuleEdge",
    "TaskInstance",
    # Enums
    "TATType",
    "TaskStatus",
    # Exceptions
    "CycleDetectedException",
    "FlowSenseException",
    "InvalidTATConfigException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
    # Value objects
    "TATConfig",
]
