"""DiscoveryQuestion ORM model. Written by the generation workflow only."""

from typing import Any

from sqlalchemy import JSON, Boolean, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import AssessmentScopedModel


class DiscoveryQuestion(AssessmentScopedModel, Base):
    """Generated question grouped by dimension_key. Table: discovery_question."""

    __tablename__ = "discovery_question"

    dimension_key: Mapped[str] = mapped_column(String, nullable=False)
    dimension_name: Mapped[str | None] = mapped_column(String, nullable=True)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    context: Mapped[str | None] = mapped_column(Text, nullable=True)
    answer_format: Mapped[str] = mapped_column(String(20), nullable=False, default="text")
    options: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    confidence_impact: Mapped[str] = mapped_column(String(10), nullable=False, default="medium")
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    evidence_type: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        Index(
            "ix_discovery_question_assessment_order",
            "assessment_id",
            "dimension_key",
            "display_order",
        ),
    )
