"""Document request repository (slots). Rows are written by the generator."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.documents import DocumentRequest as DocumentRequestEntity
from app.domain.enums import ConfidenceImpact
from app.infrastructure.persistence.models.document_request import DocumentRequest
from app.infrastructure.persistence.repositories.base import BaseRepository


def _to_result(r: DocumentRequest) -> DocumentRequestEntity:
    """Map ORM to the domain document request."""
    return DocumentRequestEntity(
        id=r.id,
        assessment_id=r.assessment_id,
        document_type=r.document_type,
        dimension_key=r.dimension_key,
        description=r.description,
        why_needed=r.why_needed,
        accepted_formats=list(r.accepted_formats) if r.accepted_formats else None,
        example_filenames=list(r.example_filenames) if r.example_filenames else None,
        is_required=r.is_required,
        confidence_impact=ConfidenceImpact(r.confidence_impact),
    )


class DocumentRequestRepository(BaseRepository[DocumentRequest]):
    """Document request repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DocumentRequest)

    async def get_by_id(self, request_id: str) -> DocumentRequestEntity | None:
        r = await self._get_model(request_id)
        return _to_result(r) if r else None

    async def list_by_assessment(self, assessment_id: str) -> list[DocumentRequestEntity]:
        result = await self.db.execute(
            select(DocumentRequest)
            .where(DocumentRequest.assessment_id == assessment_id)
            .order_by(DocumentRequest.dimension_key, DocumentRequest.created_at)
        )
        return [_to_result(r) for r in result.scalars().all()]

    async def count_by_assessment(self, assessment_id: str) -> int:
        return await self._count_for_assessment(assessment_id)
