"""DTOs for questionnaire use cases."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.entities.assessment import ApprovalRecord
from app.domain.entities.documents import DocumentRequest
from app.domain.entities.questionnaire import Answer, DiscoveryQuestion
from app.domain.enums import FormSubmissionStatus, GenerationJobState


@dataclass(frozen=True)
class QuestionWithAnswer:
    question: DiscoveryQuestion
    answer: Answer | None = None


@dataclass(frozen=True)
class QuestionnaireView:
    """Everything needed to render the requirements form for one assessment."""

    assessment_id: str
    company_name: str
    job_state: GenerationJobState
    form_status: FormSubmissionStatus
    approval: ApprovalRecord | None
    questions: list[QuestionWithAnswer] = field(default_factory=list)
    document_requests: list[DocumentRequest] = field(default_factory=list)
    submitted_at: datetime | None = None


@dataclass(frozen=True)
class SaveAnswerCommand:
    assessment_id: str
    question_id: str
    answer_text: str | None = None
    answer_json: Any = None


@dataclass(frozen=True)
class SaveAnswerResult:
    question_id: str
    saved_at: datetime
