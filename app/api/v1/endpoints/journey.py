"""Journey tracker API."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_current_actor, get_journey_use_case
from app.application.dtos.actor import Actor
from app.application.use_cases import GetJourneyUseCase
from app.schemas.journey import JourneyResponse, JourneyStageItem

router = APIRouter()


@router.get("/{assessment_id}/journey", response_model=JourneyResponse)
async def get_journey(
    assessment_id: str,
    use_case: Annotated[GetJourneyUseCase, Depends(get_journey_use_case)],
    _: Annotated[Actor, Depends(get_current_actor)],
):
    stages = await use_case.execute(assessment_id)
    return JourneyResponse(
        assessment_id=assessment_id,
        stages=[JourneyStageItem.model_validate(s) for s in stages],
    )
