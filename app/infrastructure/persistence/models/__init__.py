"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.assessment import Assessment
from app.infrastructure.persistence.models.discovery_answer import DiscoveryAnswer
from app.infrastructure.persistence.models.discovery_question import DiscoveryQuestion
from app.infrastructure.persistence.models.document_request import DocumentRequest
from app.infrastructure.persistence.models.document_upload import DocumentUpload
from app.infrastructure.persistence.models.generation_job import GenerationJob
from app.infrastructure.persistence.models.mixins import (
    AssessmentScopedMixin,
    AssessmentScopedModel,
    CuidMixin,
    TimestampMixin,
)

__all__ = [
    "Assessment",
    "AssessmentScopedMixin",
    "AssessmentScopedModel",
    "CuidMixin",
    "DiscoveryAnswer",
    "DiscoveryQuestion",
    "DocumentRequest",
    "DocumentUpload",
    "GenerationJob",
    "TimestampMixin",
]
