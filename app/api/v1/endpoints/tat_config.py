"""TAT config API: read and replace the organization's office-hours calendar."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_organization_id,
    get_tat_config_use_case,
    get_update_tat_config_use_case,
)
from app.application.use_cases.tat_config import (
    GetTATConfigUseCase,
    UpdateTATConfigUseCase,
)
from app.core.limiter import limit_writes
from app.schemas.tat_config import TATConfigRequest, TATConfigResponse

router = APIRouter()


@router.get("", response_model=TATConfigResponse)
async def get_tat_config(
    organization_id: Annotated[str, Depends(get_organization_id)],
    get_uc: Annotated[GetTATConfigUseCase, Depends(get_tat_config_use_case)],
):
    """Return the stored config, or the defaults (is_default=true)."""
    config, is_default = await get_uc.execute(organization_id)
    return TATConfigResponse.from_value(config, is_default=is_default)


@router.put("", response_model=TATConfigResponse)
@limit_writes
async def put_tat_config(
    request: Request,
    body: TATConfigRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    update_uc: Annotated[
        UpdateTATConfigUseCase, Depends(get_update_tat_config_use_case)
    ],
):
    """Validate and store the config (INVALID_TAT_CONFIG on a bad calendar)."""
    saved = await update_uc.execute(organization_id, body.to_value())
    return TATConfigResponse.from_value(saved)
