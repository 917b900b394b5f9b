"""Repository implementations for the persistence layer."""

from app.infrastructure.persistence.repositories.assessment_repo import AssessmentRepository
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.discovery_answer_repo import (
    DiscoveryAnswerRepository,
)
from app.infrastructure.persistence.repositories.discovery_question_repo import (
    DiscoveryQuestionRepository,
)
from app.infrastructure.persistence.repositories.document_request_repo import (
    DocumentRequestRepository,
)
from app.infrastructure.persistence.repositories.document_upload_repo import (
    DocumentUploadRepository,
)
from app.infrastructure.persistence.repositories.generation_job_repo import (
    GenerationJobRepository,
)

__all__ = [
    "AssessmentRepository",
    "BaseRepository",
    "DiscoveryAnswerRepository",
    "DiscoveryQuestionRepository",
    "DocumentRequestRepository",
    "DocumentUploadRepository",
    "GenerationJobRepository",
]
