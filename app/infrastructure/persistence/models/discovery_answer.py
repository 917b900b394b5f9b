"""DiscoveryAnswer ORM model. At most one row per question (upsert target)."""

from typing import Any

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import AssessmentScopedModel


class DiscoveryAnswer(AssessmentScopedModel, Base):
    """Current answer for a discovery question. Table: discovery_answer."""

    __tablename__ = "discovery_answer"

    discovery_question_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("discovery_question.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    answer_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    answer_json: Mapped[Any | None] = mapped_column(JSON, nullable=True)
    answered_by: Mapped[str | None] = mapped_column(String, nullable=True)
