"""DocumentRequest ORM model. Generated alongside the questions; one per slot."""

from typing import Any

from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import AssessmentScopedModel


class DocumentRequest(AssessmentScopedModel, Base):
    """Requested document type. Table: document_request."""

    __tablename__ = "document_request"

    dimension_key: Mapped[str | None] = mapped_column(String, nullable=True)
    document_type: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    why_needed: Mapped[str | None] = mapped_column(Text, nullable=True)
    accepted_formats: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    example_filenames: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    confidence_impact: Mapped[str] = mapped_column(String(10), nullable=False, default="medium")
