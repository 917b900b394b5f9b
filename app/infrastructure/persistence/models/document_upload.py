"""DocumentUpload ORM model. Files stored in a slot (request id or '__other__')."""

from sqlalchemy import BigInteger, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import AssessmentScopedModel


class DocumentUpload(AssessmentScopedModel, Base):
    """Uploaded file metadata. Table: document_upload.

    document_request_id is null for the other slot.
    """

    __tablename__ = "document_upload"

    slot_key: Mapped[str] = mapped_column(String, nullable=False)
    document_request_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("document_request.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    file_name: Mapped[str] = mapped_column(String, nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    file_type: Mapped[str] = mapped_column(String, nullable=False)
    storage_ref: Mapped[str] = mapped_column(String, nullable=False)
    uploaded_by: Mapped[str] = mapped_column(String(20), nullable=False)

    __table_args__ = (
        Index("ix_document_upload_assessment_slot", "assessment_id", "slot_key"),
    )
