"""Client-side document slots: validate, upload and remove files per slot.

Every file is validated locally before any network call. Files in a batch
succeed or fail independently, and each slot tracks its own uploading flag
so different slots can upload at the same time.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from app.client.api_client import ApiError
from app.client.gateways import DocumentGateway
from app.client.questionnaire_engine import FormAccess
from app.domain.entities.documents import OTHER_SLOT_KEY
from app.domain.exceptions import ValidationException
from app.domain.value_objects.upload import UploadPolicy
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

READ_ONLY_ERROR = "Documents are read-only for this actor"


@dataclass(frozen=True)
class LocalFile:
    """A file picked by the user, not yet uploaded."""

    name: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class FileResult:
    """Outcome for one file of a batch: the stored document or an error message."""

    file_name: str
    document: dict[str, Any] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DocumentSlotManager:
    """Uploaded files per slot for one assessment."""

    def __init__(
        self,
        assessment_id: str,
        gateway: DocumentGateway,
        access: FormAccess,
        slot_keys: Iterable[str] = (),
        policy: UploadPolicy | None = None,
    ) -> None:
        self.assessment_id = assessment_id
        self.gateway = gateway
        self.access = access
        self.policy = policy or UploadPolicy()
        self.slots: dict[str, list[dict[str, Any]]] = {key: [] for key in slot_keys}
        self.slots.setdefault(OTHER_SLOT_KEY, [])
        self._uploading: dict[str, int] = {}

    def is_uploading(self, slot_key: str) -> bool:
        return self._uploading.get(slot_key, 0) > 0

    def documents(self, slot_key: str) -> list[dict[str, Any]]:
        return list(self.slots.get(slot_key, []))

    def _require_slot(self, slot_key: str) -> None:
        if slot_key not in self.slots:
            raise ValidationException(f"Unknown document slot: {slot_key}", field="slot_key")

    async def load(self) -> None:
        """Replace local slot contents with the server's listing."""
        listing = await self.gateway.list_documents(self.assessment_id)
        for key in self.slots:
            self.slots[key] = []
        for key, docs in listing.items():
            self.slots[key] = list(docs)

    def validate(self, file: LocalFile) -> str | None:
        """Return the validation error for file, or None when acceptable."""
        try:
            self.policy.validate(file.name, file.size, file.content_type)
        except ValidationException as e:
            return e.message
        return None

    async def upload_files(self, slot_key: str, files: Iterable[LocalFile]) -> list[FileResult]:
        """Validate and upload each file; invalid or failed files are reported and skipped."""
        self._require_slot(slot_key)
        if self.access.read_only:
            return [FileResult(file.name, error=READ_ONLY_ERROR) for file in files]
        results: list[FileResult] = []
        for file in files:
            error = self.validate(file)
            if error is not None:
                results.append(FileResult(file.name, error=error))
                continue
            self._uploading[slot_key] = self._uploading.get(slot_key, 0) + 1
            try:
                document = await self.gateway.upload_document(
                    self.assessment_id, slot_key, file.name, file.content, file.content_type
                )
            except ApiError as e:
                logger.warning("Upload failed: slot=%s file=%s error=%s", slot_key, file.name, e.message)
                results.append(FileResult(file.name, error=e.message))
                continue
            finally:
                self._uploading[slot_key] -= 1
            self.slots[slot_key].append(document)
            results.append(FileResult(file.name, document=document))
        return results

    async def remove(self, slot_key: str, document_id: str) -> bool:
        """Delete an upload on the server, then drop it locally. False when not removed."""
        self._require_slot(slot_key)
        if self.access.read_only:
            return False
        try:
            await self.gateway.delete_document(document_id)
        except ApiError as e:
            logger.warning("Remove failed: document=%s error=%s", document_id, e.message)
            return False
        self.slots[slot_key] = [d for d in self.slots[slot_key] if d.get("id") != document_id]
        return True
