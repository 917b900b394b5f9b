"""API request and response schemas (Pydantic)."""

from app.schemas.approval import ApprovalResponse
from app.schemas.documents import (
    DocumentListResponse,
    DocumentRequestItem,
    UploadedDocumentItem,
)
from app.schemas.generation import (
    GenerationCallbackRequest,
    GenerationJobResponse,
    GenerationTriggerRequest,
    GenerationTriggerResponse,
)
from app.schemas.health import HealthResponse, ReadinessErrorResponse, ReadinessResponse
from app.schemas.journey import JourneyResponse, JourneyStageItem
from app.schemas.questionnaire import (
    AnswerItem,
    QuestionItem,
    QuestionnaireResponse,
    SaveAnswerRequest,
    SaveAnswerResponse,
    SubmissionResponse,
)

__all__ = [
    "AnswerItem",
    "ApprovalResponse",
    "DocumentListResponse",
    "DocumentRequestItem",
    "GenerationCallbackRequest",
    "GenerationJobResponse",
    "GenerationTriggerRequest",
    "GenerationTriggerResponse",
    "HealthResponse",
    "JourneyResponse",
    "JourneyStageItem",
    "QuestionItem",
    "QuestionnaireResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "SaveAnswerRequest",
    "SaveAnswerResponse",
    "SubmissionResponse",
]
