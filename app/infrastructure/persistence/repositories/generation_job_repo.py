"""Generation job repository: one row per assessment, created and locked on trigger."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.generation_job import GenerationJobEntity
from app.domain.enums import GenerationJobState
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.models.generation_job import GenerationJob
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.generators import generate_cuid

_COPIED_FIELDS = (
    "started_at",
    "completed_at",
    "duration_seconds",
    "error_message",
    "error_detail",
    "questions_count",
    "documents_count",
    "retry_count",
    "external_execution_id",
)


def _to_result(j: GenerationJob) -> GenerationJobEntity:
    """Map ORM to GenerationJobEntity."""
    return GenerationJobEntity(
        id=j.id,
        assessment_id=j.assessment_id,
        state=GenerationJobState(j.state),
        started_at=j.started_at,
        completed_at=j.completed_at,
        duration_seconds=j.duration_seconds,
        error_message=j.error_message,
        error_detail=j.error_detail,
        questions_count=j.questions_count,
        documents_count=j.documents_count,
        retry_count=j.retry_count,
        external_execution_id=j.external_execution_id,
    )


def _apply(row: GenerationJob, job: GenerationJobEntity) -> None:
    row.state = job.state.value
    for name in _COPIED_FIELDS:
        setattr(row, name, getattr(job, name))


class GenerationJobRepository(BaseRepository[GenerationJob]):
    """Generation job repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, GenerationJob)

    async def get_by_assessment(self, assessment_id: str) -> GenerationJobEntity | None:
        result = await self.db.execute(
            select(GenerationJob).where(GenerationJob.assessment_id == assessment_id)
        )
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def lock_for_trigger(self, assessment_id: str) -> GenerationJobEntity:
        """Return the job row locked FOR UPDATE, creating it as not_started first.

        The insert is ON CONFLICT DO NOTHING, so concurrent first triggers
        share one row. The lock is held until the transaction ends; a second
        trigger blocks here and then sees the first one's state.
        """
        await self.db.execute(
            insert(GenerationJob)
            .values(
                id=generate_cuid(),
                assessment_id=assessment_id,
                state=GenerationJobState.NOT_STARTED.value,
                questions_count=0,
                documents_count=0,
                retry_count=0,
            )
            .on_conflict_do_nothing(index_elements=[GenerationJob.assessment_id])
        )
        result = await self.db.execute(
            select(GenerationJob)
            .where(GenerationJob.assessment_id == assessment_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return _to_result(result.scalar_one())

    async def save(self, job: GenerationJobEntity) -> GenerationJobEntity:
        """Write the entity's state onto its existing row."""
        if job.id is None:
            raise ResourceNotFoundException("generation_job", job.assessment_id)
        existing = await self._get_model(job.id)
        if existing is None:
            raise ResourceNotFoundException("generation_job", job.id)
        _apply(existing, job)
        await self.db.flush()
        await self.db.refresh(existing)
        return _to_result(existing)
