"""Application services: TAT calculator, cycle detector, path builder, scheduler."""

from app.application.services.cycle_detector import (
    CycleDetectionResult,
    FlowRuleGraph,
    detect_cycle,
    validate_no_cycle,
)
from app.application.services.flow_path_builder import (
    FlowPath,
    FlowPathBuilder,
    FlowPathStep,
    find_start_rule,
    statuses_from_tasks,
)
from app.application.services.flow_scheduler import (
    FlowScheduler,
    NextTaskAssignment,
    ScheduledStep,
)
from app.application.services.tat_calculator import (
    MAX_TAT_VALUE,
    TATCalculator,
    calculate_tat,
)

__all__ = [
    "MAX_TAT_VALUE",
    "CycleDetectionResult",
    "FlowPath",
    "FlowPathBuilder",
    "FlowPathStep",
    "FlowRuleGraph",
    "FlowScheduler",
    "NextTaskAssignment",
    "ScheduledStep",
    "TATCalculator",
    "calculate_tat",
    "detect_cycle",
    "find_start_rule",
    "statuses_from_tasks",
    "validate_no_cycle",
]
