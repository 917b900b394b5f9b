"""Discovery question repository (read side; rows are written by the generator)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.questionnaire import DiscoveryQuestion as DiscoveryQuestionEntity
from app.domain.enums import AnswerFormat, ConfidenceImpact
from app.infrastructure.persistence.models.discovery_question import DiscoveryQuestion
from app.infrastructure.persistence.repositories.base import BaseRepository


def _to_result(q: DiscoveryQuestion) -> DiscoveryQuestionEntity:
    """Map ORM to the domain question."""
    return DiscoveryQuestionEntity(
        id=q.id,
        assessment_id=q.assessment_id,
        dimension_key=q.dimension_key,
        dimension_name=q.dimension_name,
        question_text=q.question_text,
        context=q.context,
        answer_format=AnswerFormat(q.answer_format),
        options=list(q.options) if q.options else None,
        is_required=q.is_required,
        confidence_impact=ConfidenceImpact(q.confidence_impact),
        display_order=q.display_order,
        evidence_type=q.evidence_type,
    )


class DiscoveryQuestionRepository(BaseRepository[DiscoveryQuestion]):
    """Discovery question repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DiscoveryQuestion)

    async def get_by_id(self, question_id: str) -> DiscoveryQuestionEntity | None:
        q = await self._get_model(question_id)
        return _to_result(q) if q else None

    async def list_by_assessment(self, assessment_id: str) -> list[DiscoveryQuestionEntity]:
        result = await self.db.execute(
            select(DiscoveryQuestion)
            .where(DiscoveryQuestion.assessment_id == assessment_id)
            .order_by(DiscoveryQuestion.dimension_key, DiscoveryQuestion.display_order)
        )
        return [_to_result(q) for q in result.scalars().all()]

    async def count_by_assessment(self, assessment_id: str) -> int:
        return await self._count_for_assessment(assessment_id)
