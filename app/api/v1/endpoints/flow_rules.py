"""Flow rule API: thin routes delegating to use cases and the flow rule repository."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    get_create_flow_rule_use_case,
    get_create_flow_rules_bulk_use_case,
    get_flow_rule_repo,
    get_flow_rule_repo_for_write,
    get_organization_id,
    get_update_flow_rule_use_case,
)
from app.application.interfaces.repositories import IFlowRuleRepository
from app.application.services.cycle_detector import detect_cycle
from app.application.use_cases.flow_rules import (
    CreateFlowRuleUseCase,
    CreateFlowRulesBulkUseCase,
    UpdateFlowRuleUseCase,
)
from app.core.limiter import limit_writes
from app.domain.entities.flow_rule import RuleEdge
from app.domain.exceptions import ResourceNotFoundException
from app.schemas.flow_rule import (
    CycleCheckResponse,
    FlowRuleBulkCreateRequest,
    FlowRuleBulkCreateResponse,
    FlowRuleCreateRequest,
    FlowRuleResponse,
    FlowRuleUpdate,
    FlowRuleValidateRequest,
)

router = APIRouter()


@router.post("", response_model=FlowRuleResponse, status_code=201)
@limit_writes
async def create_flow_rule(
    request: Request,
    body: FlowRuleCreateRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    create_uc: Annotated[CreateFlowRuleUseCase, Depends(get_create_flow_rule_use_case)],
):
    """Create a flow rule. Rejected with CYCLE_DETECTED when it would loop the workflow."""
    rule = await create_uc.execute(organization_id, body.to_dto())
    return FlowRuleResponse.model_validate(rule)


@router.post("/bulk", response_model=FlowRuleBulkCreateResponse, status_code=201)
@limit_writes
async def create_flow_rules_bulk(
    request: Request,
    body: FlowRuleBulkCreateRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    bulk_uc: Annotated[
        CreateFlowRulesBulkUseCase, Depends(get_create_flow_rules_bulk_use_case)
    ],
):
    """Create many rules; invalid ones are listed in failed_rules, valid ones are kept."""
    result = await bulk_uc.execute(organization_id, [r.to_dto() for r in body.rules])
    return FlowRuleBulkCreateResponse.model_validate(result)


@router.post(
    "/validate", response_model=CycleCheckResponse, response_model_exclude_none=True
)
async def validate_flow_rule(
    body: FlowRuleValidateRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    flow_rule_repo: Annotated[IFlowRuleRepository, Depends(get_flow_rule_repo)],
):
    """Dry-run cycle check of one edge against the system's rules. Nothing is stored."""
    existing = [
        r
        for r in await flow_rule_repo.list_for_system(organization_id, body.system)
        if r.id != body.exclude_rule_id
    ]
    candidate = RuleEdge(
        current_task=body.current_task,
        status=body.status,
        next_task=body.next_task,
    )
    result = detect_cycle(existing, candidate)
    return CycleCheckResponse(
        has_cycle=result.has_cycle, cycle=result.cycle, message=result.message
    )


@router.get("", response_model=list[FlowRuleResponse])
async def list_flow_rules(
    organization_id: Annotated[str, Depends(get_organization_id)],
    flow_rule_repo: Annotated[IFlowRuleRepository, Depends(get_flow_rule_repo)],
    system: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List the organization's rules, optionally for one system."""
    rules = await flow_rule_repo.list_for_organization(
        organization_id, system=system, skip=skip, limit=limit
    )
    return [FlowRuleResponse.model_validate(r) for r in rules]


@router.get("/{rule_id}", response_model=FlowRuleResponse)
async def get_flow_rule(
    rule_id: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    flow_rule_repo: Annotated[IFlowRuleRepository, Depends(get_flow_rule_repo)],
):
    """Get flow rule by id (organization-scoped)."""
    rule = await flow_rule_repo.get_by_id_and_organization(rule_id, organization_id)
    if not rule:
        raise ResourceNotFoundException("flow_rule", rule_id)
    return FlowRuleResponse.model_validate(rule)


@router.patch("/{rule_id}", response_model=FlowRuleResponse)
@limit_writes
async def update_flow_rule(
    request: Request,
    rule_id: str,
    body: FlowRuleUpdate,
    organization_id: Annotated[str, Depends(get_organization_id)],
    update_uc: Annotated[UpdateFlowRuleUseCase, Depends(get_update_flow_rule_use_case)],
):
    """Update flow rule (partial). Graph changes are cycle-checked again."""
    rule = await update_uc.execute(organization_id, rule_id, body.changes())
    return FlowRuleResponse.model_validate(rule)


@router.delete("/{rule_id}", status_code=204)
@limit_writes
async def delete_flow_rule(
    request: Request,
    rule_id: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    flow_rule_repo: Annotated[
        IFlowRuleRepository, Depends(get_flow_rule_repo_for_write)
    ],
):
    """Delete flow rule by id (organization-scoped)."""
    if not await flow_rule_repo.delete_rule(organization_id, rule_id):
        raise ResourceNotFoundException("flow_rule", rule_id)
