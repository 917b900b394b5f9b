"""Document slot use cases: upload into a slot, remove own uploads, list by slot."""

from __future__ import annotations

import asyncio
import hashlib
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta
from typing import BinaryIO

from app.application.dtos.actor import Actor
from app.application.dtos.document import DocumentUploadCreate
from app.application.interfaces.repositories import (
    IAssessmentRepository,
    IDocumentRequestRepository,
    IDocumentUploadRepository,
)
from app.application.interfaces.services import IStorageService
from app.domain.access import ensure_can_write
from app.domain.entities.assessment import AssessmentEntity
from app.domain.entities.documents import OTHER_SLOT_KEY, UploadedDocument
from app.domain.exceptions import (
    AuthorizationException,
    JourneyException,
    ResourceNotFoundException,
)
from app.domain.value_objects.upload import UploadPolicy, sanitize_filename
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

DOWNLOAD_URL_TTL = timedelta(hours=1)


def _rewind_if_seekable(file_data: BinaryIO) -> None:
    """Reset file position to start if stream is seekable."""
    if getattr(file_data, "seekable", lambda: False)():
        file_data.seek(0)


def _checksum_and_size_sync(file_data: BinaryIO) -> tuple[str, int]:
    """Blocking: one pass over file_data (run in a thread). Returns (hexdigest, byte_count)."""
    sha256 = hashlib.sha256()
    total = 0
    while chunk := file_data.read(65536):
        sha256.update(chunk)
        total += len(chunk)
    _rewind_if_seekable(file_data)
    return sha256.hexdigest(), total


class DocumentSlotService:
    """Uploads and removals for the document slots of one assessment.

    Slots are the assessment's document requests plus the fixed other slot.
    Each slot holds any number of files.
    """

    def __init__(
        self,
        storage_service: IStorageService,
        upload_repo: IDocumentUploadRepository,
        document_request_repo: IDocumentRequestRepository,
        assessment_repo: IAssessmentRepository,
        policy: UploadPolicy | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.storage = storage_service
        self.upload_repo = upload_repo
        self.document_request_repo = document_request_repo
        self.assessment_repo = assessment_repo
        self.policy = policy or UploadPolicy()
        self.clock = clock

    async def _get_assessment(self, assessment_id: str) -> AssessmentEntity:
        assessment = await self.assessment_repo.get_by_id(assessment_id)
        if assessment is None:
            raise ResourceNotFoundException("assessment", assessment_id)
        return assessment

    async def _resolve_slot(self, assessment_id: str, slot_key: str) -> str | None:
        """Return the document request id behind slot_key (None for the other slot)."""
        if slot_key == OTHER_SLOT_KEY:
            return None
        request = await self.document_request_repo.get_by_id(slot_key)
        if request is None or request.assessment_id != assessment_id:
            raise ResourceNotFoundException("document slot", slot_key)
        return request.id

    def _storage_ref(self, assessment_id: str, slot_key: str, file_name: str) -> str:
        stamp = self.clock().strftime("%Y%m%d%H%M%S%f")
        return f"assessments/{assessment_id}/{slot_key}/{stamp}_{file_name}"

    async def upload(
        self,
        actor: Actor,
        assessment_id: str,
        slot_key: str,
        file_data: BinaryIO,
        file_name: str,
        content_type: str | None,
    ) -> UploadedDocument:
        """Validate, store and record one file in a slot.

        The stored object is deleted again when the record cannot be written.
        """
        assessment = await self._get_assessment(assessment_id)
        document_request_id = await self._resolve_slot(assessment_id, slot_key)
        ensure_can_write(actor.role, assessment, "document")

        checksum, size = await asyncio.to_thread(_checksum_and_size_sync, file_data)
        self.policy.validate(file_name, size, content_type)
        safe_name = sanitize_filename(file_name)
        storage_ref = self._storage_ref(assessment_id, slot_key, safe_name)
        mime_type = content_type or "application/octet-stream"

        await self.storage.upload(
            file_data=file_data,
            storage_ref=storage_ref,
            expected_checksum=checksum,
            content_type=mime_type,
            metadata={"assessment_id": assessment_id, "slot_key": slot_key},
        )
        try:
            created = await self.upload_repo.create(
                DocumentUploadCreate(
                    assessment_id=assessment_id,
                    slot_key=slot_key,
                    document_request_id=document_request_id,
                    file_name=file_name,
                    file_size=size,
                    file_type=mime_type,
                    storage_ref=storage_ref,
                    uploaded_by=actor.role,
                )
            )
        except Exception:
            logger.exception(
                "Upload record failed, removing stored file: %s", storage_ref
            )
            try:
                await self.storage.delete(storage_ref)
            except JourneyException:
                logger.exception("Rollback of stored file failed: %s", storage_ref)
            raise
        logger.info(
            "Document uploaded: assessment=%s slot=%s size=%s by=%s",
            assessment_id,
            slot_key,
            size,
            actor.role.value,
        )
        return created

    async def remove(self, actor: Actor, document_id: str) -> None:
        """Delete one of the actor's own uploads (storage object, then record)."""
        document = await self.upload_repo.get_by_id(document_id)
        if document is None:
            raise ResourceNotFoundException("document", document_id)
        if document.uploaded_by != actor.role:
            raise AuthorizationException(
                "document",
                "remove",
                message="Documents can only be removed by the role that uploaded them",
            )
        assessment = await self._get_assessment(document.assessment_id)
        ensure_can_write(actor.role, assessment, "document")

        try:
            await self.storage.delete(document.storage_ref)
        except JourneyException:
            logger.exception("Storage delete failed for %s", document.storage_ref)
        await self.upload_repo.delete(document_id)
        logger.info("Document removed: %s by=%s", document_id, actor.role.value)

    async def list_documents(self, assessment_id: str) -> dict[str, list[UploadedDocument]]:
        """Return uploads grouped by slot key in upload order, with download URLs."""
        await self._get_assessment(assessment_id)
        grouped: dict[str, list[UploadedDocument]] = {}
        for doc in await self.upload_repo.list_by_assessment(assessment_id):
            try:
                url = await self.storage.generate_download_url(
                    doc.storage_ref, expiration=DOWNLOAD_URL_TTL
                )
            except JourneyException:
                logger.warning("No download URL for %s", doc.storage_ref)
                url = None
            grouped.setdefault(doc.slot_key, []).append(replace(doc, download_url=url))
        return grouped
