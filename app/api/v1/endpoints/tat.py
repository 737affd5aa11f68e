"""TAT calculation API: due date for a timestamp, amount and mode."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_organization_id, get_tat_config_use_case
from app.application.services.tat_calculator import TATCalculator
from app.application.use_cases.tat_config import GetTATConfigUseCase
from app.domain.enums import TATType
from app.schemas.tat_config import TATCalculateRequest, TATCalculateResponse

router = APIRouter()


@router.post("/calculate", response_model=TATCalculateResponse)
async def calculate_tat(
    body: TATCalculateRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    get_config_uc: Annotated[GetTATConfigUseCase, Depends(get_tat_config_use_case)],
):
    """Compute the due date; an inline config overrides the organization's."""
    if body.config is not None:
        config = body.config.to_value()
    else:
        config, _ = await get_config_uc.execute(organization_id)
    due_at = TATCalculator(config).calculate(body.timestamp, body.amount, body.tat_type)
    return TATCalculateResponse(
        due_at=due_at,
        tat_type=TATType.parse(body.tat_type).value,
        timezone=config.timezone,
    )
