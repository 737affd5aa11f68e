"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities, value objects or application DTOs only;
no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.flow_rule import FlowRuleCreate
    from app.domain.entities.flow_rule import FlowRule
    from app.domain.value_objects.core import TATConfig


# Flow rule repository interface
class IFlowRuleRepository(Protocol):
    """Protocol for flow rule repository (DIP)."""

    async def list_for_system(self, organization_id: str, system: str) -> list[FlowRule]:
        """Return every rule of one system in creation order (cycle detection input)."""

    async def list_for_organization(
        self,
        organization_id: str,
        system: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[FlowRule]:
        """Return rules of the organization, optionally filtered by system."""

    async def get_by_id_and_organization(
        self, rule_id: str, organization_id: str
    ) -> FlowRule | None:
        """Return rule by id if it belongs to the organization."""

    async def create_rule(self, organization_id: str, data: FlowRuleCreate) -> FlowRule:
        """Persist a new rule."""

    async def update_rule(
        self, organization_id: str, rule_id: str, changes: dict[str, Any]
    ) -> FlowRule | None:
        """Apply changes to a rule; None when not found in the organization."""

    async def delete_rule(self, organization_id: str, rule_id: str) -> bool:
        """Delete a rule; False when not found in the organization."""


# TAT config repository interface
class ITATConfigRepository(Protocol):
    """Protocol for per-organization TAT configuration storage."""

    async def get_for_organization(self, organization_id: str) -> TATConfig | None:
        """Return the stored config, or None when the organization uses defaults."""

    async def upsert(self, organization_id: str, config: TATConfig) -> TATConfig:
        """Create or replace the organization's config."""
