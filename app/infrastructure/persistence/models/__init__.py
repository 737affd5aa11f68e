"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.flow_rule import FlowRule
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    OrganizationMixin,
    OrganizationModel,
    TimestampMixin,
)
from app.infrastructure.persistence.models.tat_config import TATConfigRecord

__all__ = [
    "CuidMixin",
    "FlowRule",
    "OrganizationMixin",
    "OrganizationModel",
    "TATConfigRecord",
    "TimestampMixin",
]
