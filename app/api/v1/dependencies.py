"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the organization id, DB-backed repositories
and application use cases. Use cases are built from infrastructure
implementations here; routes depend only on these dependencies.
Tests swap repositories through app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.repositories import (
    IFlowRuleRepository,
    ITATConfigRepository,
)
from app.application.services.flow_path_builder import FlowPathBuilder
from app.application.use_cases.flow_rules import (
    CreateFlowRuleUseCase,
    CreateFlowRulesBulkUseCase,
    UpdateFlowRuleUseCase,
)
from app.application.use_cases.flows import GetFlowPathUseCase, ScheduleFlowUseCase
from app.application.use_cases.tat_config import (
    GetTATConfigUseCase,
    UpdateTATConfigUseCase,
)
from app.core.config import get_settings
from app.core.organization_validation import is_valid_organization_id_format
from app.domain.value_objects.core import TATConfig
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    FlowRuleRepository,
    TATConfigRepository,
)
from app.shared.context import set_organization_id


async def get_organization_id(request: Request) -> str:
    """Resolve the organization from the organization header (required, format-checked)."""
    name = get_settings().organization_header_name
    value = request.headers.get(name)
    if not value:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required header: {name}",
        )
    if not is_valid_organization_id_format(value):
        raise HTTPException(
            status_code=400,
            detail="Invalid organization ID format (use alphanumeric, hyphen, underscore; max 64 characters)",
        )
    set_organization_id(value)
    return value


def get_default_tat_config() -> TATConfig:
    """TAT config for organizations without a stored one (from settings)."""
    settings = get_settings()
    return TATConfig(
        office_start_hour=settings.default_office_start_hour,
        office_end_hour=settings.default_office_end_hour,
        timezone=settings.default_timezone,
        skip_weekends=settings.default_skip_weekends,
    )


# ---- Repositories ----


async def get_flow_rule_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> IFlowRuleRepository:
    """Flow rule repository for read operations."""
    return FlowRuleRepository(db)


async def get_flow_rule_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> IFlowRuleRepository:
    """Flow rule repository for writes (transactional)."""
    return FlowRuleRepository(db)


async def get_tat_config_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ITATConfigRepository:
    """TAT config repository for read operations."""
    return TATConfigRepository(db)


async def get_tat_config_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ITATConfigRepository:
    """TAT config repository for writes (transactional)."""
    return TATConfigRepository(db)


# ---- Use cases ----


def get_create_flow_rule_use_case(
    flow_rule_repo: Annotated[IFlowRuleRepository, Depends(get_flow_rule_repo_for_write)],
) -> CreateFlowRuleUseCase:
    return CreateFlowRuleUseCase(flow_rule_repo)


def get_create_flow_rules_bulk_use_case(
    flow_rule_repo: Annotated[IFlowRuleRepository, Depends(get_flow_rule_repo_for_write)],
) -> CreateFlowRulesBulkUseCase:
    return CreateFlowRulesBulkUseCase(
        flow_rule_repo, max_rules=get_settings().bulk_rule_limit
    )


def get_update_flow_rule_use_case(
    flow_rule_repo: Annotated[IFlowRuleRepository, Depends(get_flow_rule_repo_for_write)],
) -> UpdateFlowRuleUseCase:
    return UpdateFlowRuleUseCase(flow_rule_repo)


def get_flow_path_use_case(
    flow_rule_repo: Annotated[IFlowRuleRepository, Depends(get_flow_rule_repo)],
) -> GetFlowPathUseCase:
    return GetFlowPathUseCase(
        flow_rule_repo, FlowPathBuilder(max_depth=get_settings().walker_max_depth)
    )


def get_schedule_flow_use_case(
    flow_rule_repo: Annotated[IFlowRuleRepository, Depends(get_flow_rule_repo)],
    tat_config_repo: Annotated[ITATConfigRepository, Depends(get_tat_config_repo)],
    default_config: Annotated[TATConfig, Depends(get_default_tat_config)],
) -> ScheduleFlowUseCase:
    return ScheduleFlowUseCase(flow_rule_repo, tat_config_repo, default_config)


def get_tat_config_use_case(
    tat_config_repo: Annotated[ITATConfigRepository, Depends(get_tat_config_repo)],
    default_config: Annotated[TATConfig, Depends(get_default_tat_config)],
) -> GetTATConfigUseCase:
    return GetTATConfigUseCase(tat_config_repo, default_config)


def get_update_tat_config_use_case(
    tat_config_repo: Annotated[
        ITATConfigRepository, Depends(get_tat_config_repo_for_write)
    ],
) -> UpdateTATConfigUseCase:
    return UpdateTATConfigUseCase(tat_config_repo)
