"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.document import DocumentUploadCreate
    from app.domain.entities.assessment import AssessmentEntity
    from app.domain.entities.documents import DocumentRequest, UploadedDocument
    from app.domain.entities.generation_job import GenerationJobEntity
    from app.domain.entities.questionnaire import Answer, DiscoveryQuestion


class IAssessmentRepository(Protocol):
    """Protocol for assessment repository (DIP)."""

    async def get_by_id(self, assessment_id: str) -> AssessmentEntity | None:
        """Return assessment by id, or None."""

    async def set_approval(
        self, assessment_id: str, approved_at: datetime, approved_by: str
    ) -> bool:
        """Write the approval record only if none exists. Return True if written."""

    async def set_submitted(self, assessment_id: str, submitted_at: datetime) -> bool:
        """Set submitted_at only if not yet submitted. Return True if written."""


class IGenerationJobRepository(Protocol):
    """Protocol for the one-per-assessment generation job row."""

    async def get_by_assessment(self, assessment_id: str) -> GenerationJobEntity | None:
        """Return the job for the assessment, or None when never triggered."""

    async def lock_for_trigger(self, assessment_id: str) -> GenerationJobEntity:
        """Return the job, created as not_started when absent, locked until the transaction ends."""

    async def save(self, job: GenerationJobEntity) -> GenerationJobEntity:
        """Update the stored job; return the stored state."""


class IDiscoveryQuestionRepository(Protocol):
    """Protocol for generated discovery questions (read-only for end users)."""

    async def get_by_id(self, question_id: str) -> DiscoveryQuestion | None:
        """Return question by id, or None."""

    async def list_by_assessment(self, assessment_id: str) -> list[DiscoveryQuestion]:
        """Return questions ordered by dimension_key, display_order."""

    async def count_by_assessment(self, assessment_id: str) -> int:
        """Return number of generated questions."""


class IDiscoveryAnswerRepository(Protocol):
    """Protocol for the answer store (upsert keyed by question id)."""

    async def list_by_assessment(self, assessment_id: str) -> dict[str, Answer]:
        """Return answers keyed by question id."""

    async def upsert(
        self,
        assessment_id: str,
        question_id: str,
        answer_text: str | None,
        answer_json: Any,
        answered_by: str,
    ) -> Answer:
        """Insert or overwrite the answer for question_id; return it with updated_at."""


class IDocumentRequestRepository(Protocol):
    """Protocol for generated document requests (slots)."""

    async def get_by_id(self, request_id: str) -> DocumentRequest | None:
        """Return document request by id, or None."""

    async def list_by_assessment(self, assessment_id: str) -> list[DocumentRequest]:
        """Return document requests for the assessment."""

    async def count_by_assessment(self, assessment_id: str) -> int:
        """Return number of generated document requests."""


class IDocumentUploadRepository(Protocol):
    """Protocol for uploaded documents."""

    async def create(self, data: DocumentUploadCreate) -> UploadedDocument:
        """Persist an uploaded document record."""

    async def get_by_id(self, document_id: str) -> UploadedDocument | None:
        """Return uploaded document by id, or None."""

    async def list_by_assessment(self, assessment_id: str) -> list[UploadedDocument]:
        """Return uploads ordered by created_at."""

    async def delete(self, document_id: str) -> bool:
        """Delete the record; return True if deleted."""
