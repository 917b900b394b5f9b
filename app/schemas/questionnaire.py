"""Questionnaire, answer and submission API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import (
    AnswerFormat,
    ConfidenceImpact,
    FormSubmissionStatus,
    GenerationJobState,
)
from app.schemas.approval import ApprovalResponse
from app.schemas.documents import DocumentRequestItem


class AnswerItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    answer_text: str | None = None
    answer_json: Any = None
    answered_by: str | None = None
    updated_at: datetime | None = None


class QuestionItem(BaseModel):
    """One generated question with its current answer (None when unanswered)."""

    id: str
    dimension_key: str
    dimension_name: str | None = None
    question_text: str
    context: str | None = None
    answer_format: AnswerFormat
    options: list[str] | None = None
    is_required: bool = False
    confidence_impact: ConfidenceImpact
    display_order: int = 0
    evidence_type: str | None = None
    answer: AnswerItem | None = None


class QuestionnaireResponse(BaseModel):
    """Response for GET /assessments/{id}/questionnaire."""

    assessment_id: str
    company_name: str
    job_state: GenerationJobState
    form_status: FormSubmissionStatus
    approval: ApprovalResponse | None = None
    submitted_at: datetime | None = None
    questions: list[QuestionItem] = Field(default_factory=list)
    document_requests: list[DocumentRequestItem] = Field(default_factory=list)


class SaveAnswerRequest(BaseModel):
    """Request body for PUT /assessments/{id}/answers/{question_id}."""

    answer_text: str | None = Field(default=None, max_length=20_000)
    answer_json: Any = None


class SaveAnswerResponse(BaseModel):
    question_id: str
    saved_at: datetime


class SubmissionResponse(BaseModel):
    """Response for POST /assessments/{id}/submission."""

    submitted_at: datetime
    form_status: FormSubmissionStatus = FormSubmissionStatus.COMPLETED
