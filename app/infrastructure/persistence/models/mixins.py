"""SQLAlchemy mixins for common model patterns (DRY).

Provides: CuidMixin, TimestampMixin, AssessmentScopedMixin and the combined
AssessmentScopedModel used by every table that hangs off an assessment.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class AssessmentScopedMixin:
    """Mixin for rows owned by one assessment: assessment_id FK with CASCADE delete."""

    @declared_attr
    def assessment_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("assessment.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class AssessmentScopedModel(CuidMixin, AssessmentScopedMixin, TimestampMixin):
    """Combined mixin: CUID + assessment_id + created_at/updated_at."""

    __abstract__ = True
