"""Generation job API schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import GenerationJobState


class GenerationTriggerRequest(BaseModel):
    """Request body for POST /assessments/{id}/generation."""

    force: bool = Field(
        default=False, description="Restart a job that is still running"
    )


class GenerationJobResponse(BaseModel):
    """Observable job state; taking_too_long is advisory only."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    assessment_id: str
    state: GenerationJobState
    started_at: datetime | None = None
    completed_at: datetime | None = None
    duration_seconds: int | None = None
    error_message: str | None = None
    error_detail: dict[str, Any] | None = None
    questions_count: int = 0
    documents_count: int = 0
    retry_count: int = 0
    taking_too_long: bool = False


class GenerationTriggerResponse(BaseModel):
    """triggered is False when a running job was left untouched (no force)."""

    triggered: bool
    job: GenerationJobResponse


class GenerationCallbackRequest(BaseModel):
    """Report posted by the external workflow when a run finishes."""

    assessment_id: str = Field(..., min_length=1)
    status: Literal["completed", "failed"]
    generation_job_id: str | None = None
    error_message: str | None = Field(default=None, max_length=10_000)
    error_node: str | None = Field(default=None, max_length=200)
    questions_count: int | None = Field(default=None, ge=0)
    documents_count: int | None = Field(default=None, ge=0)
    external_execution_id: str | None = Field(default=None, max_length=200)
