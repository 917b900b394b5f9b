"""Document upload repository. Returns domain UploadedDocument entities."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.document import DocumentUploadCreate
from app.domain.entities.documents import UploadedDocument
from app.domain.enums import ActorRole
from app.infrastructure.persistence.models.document_upload import DocumentUpload
from app.infrastructure.persistence.repositories.base import BaseRepository


def _to_result(d: DocumentUpload) -> UploadedDocument:
    """Map ORM to UploadedDocument (download_url is resolved by the use case)."""
    return UploadedDocument(
        id=d.id,
        assessment_id=d.assessment_id,
        slot_key=d.slot_key,
        document_request_id=d.document_request_id,
        file_name=d.file_name,
        file_size=d.file_size,
        file_type=d.file_type,
        storage_ref=d.storage_ref,
        uploaded_by=ActorRole(d.uploaded_by),
        created_at=d.created_at,
    )


class DocumentUploadRepository(BaseRepository[DocumentUpload]):
    """Document upload repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DocumentUpload)

    async def create(self, data: DocumentUploadCreate) -> UploadedDocument:
        row = DocumentUpload(
            assessment_id=data.assessment_id,
            slot_key=data.slot_key,
            document_request_id=data.document_request_id,
            file_name=data.file_name,
            file_size=data.file_size,
            file_type=data.file_type,
            storage_ref=data.storage_ref,
            uploaded_by=data.uploaded_by.value,
        )
        if data.created_at is not None:
            row.created_at = data.created_at
        created = await self._add(row)
        return _to_result(created)

    async def get_by_id(self, document_id: str) -> UploadedDocument | None:
        d = await self._get_model(document_id)
        return _to_result(d) if d else None

    async def list_by_assessment(self, assessment_id: str) -> list[UploadedDocument]:
        result = await self.db.execute(
            select(DocumentUpload)
            .where(DocumentUpload.assessment_id == assessment_id)
            .order_by(DocumentUpload.created_at, DocumentUpload.id)
        )
        return [_to_result(d) for d in result.scalars().all()]

    async def delete(self, document_id: str) -> bool:
        """Delete upload record; return True if deleted."""
        return await self._delete_by_id(document_id)
