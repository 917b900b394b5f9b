"""Application DTOs (no ORM dependency)."""

from app.application.dtos.actor import Actor
from app.application.dtos.document import DocumentUploadCreate
from app.application.dtos.generation import (
    DispatchRequest,
    GenerationCallback,
    TriggerResult,
)
from app.application.dtos.questionnaire import (
    QuestionnaireView,
    QuestionWithAnswer,
    SaveAnswerCommand,
    SaveAnswerResult,
)

__all__ = [
    "Actor",
    "DispatchRequest",
    "DocumentUploadCreate",
    "GenerationCallback",
    "QuestionWithAnswer",
    "QuestionnaireView",
    "SaveAnswerCommand",
    "SaveAnswerResult",
    "TriggerResult",
]
