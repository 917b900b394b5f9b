"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.assessment import AUTO_APPROVER, ApprovalRecord, AssessmentEntity
from app.domain.entities.documents import (
    OTHER_SLOT_KEY,
    DocumentRequest,
    UploadedDocument,
)
from app.domain.entities.generation_job import GenerationJobEntity
from app.domain.entities.questionnaire import (
    Answer,
    Dimension,
    DiscoveryQuestion,
    all_required_answered,
    answer_is_present,
    group_dimensions,
    is_answered,
    unanswered_required,
)

__all__ = [
    "AUTO_APPROVER",
    "OTHER_SLOT_KEY",
    "Answer",
    "ApprovalRecord",
    "AssessmentEntity",
    "Dimension",
    "DiscoveryQuestion",
    "DocumentRequest",
    "GenerationJobEntity",
    "UploadedDocument",
    "all_required_answered",
    "answer_is_present",
    "group_dimensions",
    "is_answered",
    "unanswered_required",
]
