"""Document slot entities: generated document requests and uploaded files."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import ActorRole, ConfidenceImpact

# Slot key of the catch-all slot; it has no document request behind it.
OTHER_SLOT_KEY = "__other__"


@dataclass(frozen=True)
class DocumentRequest:
    """A generated request for a document; its id doubles as the slot key."""

    id: str
    assessment_id: str
    document_type: str
    dimension_key: str | None = None
    description: str | None = None
    why_needed: str | None = None
    accepted_formats: list[str] | None = None
    example_filenames: list[str] | None = None
    is_required: bool = False
    confidence_impact: ConfidenceImpact = ConfidenceImpact.MEDIUM


@dataclass(frozen=True)
class UploadedDocument:
    """A stored file in one slot. download_url is resolved at read time."""

    id: str
    assessment_id: str
    slot_key: str
    file_name: str
    file_size: int
    file_type: str
    storage_ref: str
    uploaded_by: ActorRole
    document_request_id: str | None = None
    created_at: datetime | None = None
    download_url: str | None = None

    @property
    def is_other(self) -> bool:
        return self.slot_key == OTHER_SLOT_KEY


