"""Document slot API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.domain.enums import ActorRole, ConfidenceImpact


class DocumentRequestItem(BaseModel):
    """A generated document request; id is the slot key."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    document_type: str
    dimension_key: str | None = None
    description: str | None = None
    why_needed: str | None = None
    accepted_formats: list[str] | None = None
    example_filenames: list[str] | None = None
    is_required: bool = False
    confidence_impact: ConfidenceImpact


class UploadedDocumentItem(BaseModel):
    """Stored file in a slot."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    slot_key: str
    document_request_id: str | None = None
    file_name: str
    file_size: int
    file_type: str
    uploaded_by: ActorRole
    created_at: datetime | None = None
    download_url: str | None = None


class DocumentListResponse(BaseModel):
    """Response for GET /assessments/{id}/documents: uploads grouped by slot key."""

    documents: dict[str, list[UploadedDocumentItem]]
