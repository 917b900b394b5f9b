"""Assessment repository. Returns domain entities; approval/submission are write-once."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.assessment import AssessmentEntity
from app.infrastructure.persistence.models.assessment import Assessment
from app.infrastructure.persistence.repositories.base import BaseRepository


def _to_result(a: Assessment) -> AssessmentEntity:
    """Map ORM to AssessmentEntity."""
    return AssessmentEntity(
        id=a.id,
        company_name=a.company_name,
        contact_email=a.contact_email,
        prospect_created_at=a.prospect_created_at or a.created_at,
        qualified_at=a.qualified_at,
        has_report=a.has_report,
        report_delivered_at=a.report_delivered_at,
        converted_at=a.converted_at,
        auto_approve_requirements=a.auto_approve_requirements,
        approved_at=a.approved_at,
        approved_by=a.approved_by,
        submitted_at=a.submitted_at,
    )


class AssessmentRepository(BaseRepository[Assessment]):
    """Assessment repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Assessment)

    async def get_by_id(self, assessment_id: str) -> AssessmentEntity | None:
        a = await self._get_model(assessment_id)
        return _to_result(a) if a else None

    async def set_approval(
        self, assessment_id: str, approved_at: datetime, approved_by: str
    ) -> bool:
        """Conditional write: only succeeds while approved_at is still null."""
        result = await self.db.execute(
            update(Assessment)
            .where(Assessment.id == assessment_id, Assessment.approved_at.is_(None))
            .values(approved_at=approved_at, approved_by=approved_by)
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) > 0

    async def set_submitted(self, assessment_id: str, submitted_at: datetime) -> bool:
        """Conditional write: only succeeds while submitted_at is still null."""
        result = await self.db.execute(
            update(Assessment)
            .where(Assessment.id == assessment_id, Assessment.submitted_at.is_(None))
            .values(submitted_at=submitted_at)
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) > 0
