"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.flow_rule_repo import (
    FlowRuleRepository,
)
from app.infrastructure.persistence.repositories.tat_config_repo import (
    TATConfigRepository,
)

__all__ = [
    "BaseRepository",
    "FlowRuleRepository",
    "TATConfigRepository",
]
