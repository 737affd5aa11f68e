"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories).
"""

from app.application.interfaces import IFlowRuleRepository, ITATConfigRepository
from app.application.services.cycle_detector import detect_cycle, validate_no_cycle
from app.application.services.flow_path_builder import FlowPathBuilder
from app.application.services.flow_scheduler import FlowScheduler
from app.application.services.tat_calculator import TATCalculator, calculate_tat

__all__ = [
    "FlowPathBuilder",
    "FlowScheduler",
    "IFlowRuleRepository",
    "ITATConfigRepository",
    "TATCalculator",
    "calculate_tat",
    "detect_cycle",
    "validate_no_cycle",
]
