"""DTOs for document slot use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import ActorRole


@dataclass(frozen=True)
class DocumentUploadCreate:
    """Write-model for a stored upload. Use case builds this; repo persists it."""

    assessment_id: str
    slot_key: str
    document_request_id: str | None
    file_name: str
    file_size: int
    file_type: str
    storage_ref: str
    uploaded_by: ActorRole
    created_at: datetime | None = None
