"""Journey tracker API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.domain.enums import StageStatus


class JourneyStageItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    title: str
    status: StageStatus
    subtitle: str | None = None
    timestamp: datetime | None = None
    needs_attention: bool = False


class JourneyResponse(BaseModel):
    """Response for GET /assessments/{id}/journey: stages in display order."""

    assessment_id: str
    stages: list[JourneyStageItem]
