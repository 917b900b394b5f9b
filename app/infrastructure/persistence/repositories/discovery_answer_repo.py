"""Discovery answer repository: single-row upsert per question (last write wins)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.questionnaire import Answer
from app.infrastructure.persistence.models.discovery_answer import DiscoveryAnswer
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.generators import generate_cuid


def _to_result(a: DiscoveryAnswer) -> Answer:
    """Map ORM to Answer."""
    return Answer(
        question_id=a.discovery_question_id,
        assessment_id=a.assessment_id,
        answer_text=a.answer_text,
        answer_json=a.answer_json,
        answered_by=a.answered_by,
        updated_at=a.updated_at,
    )


class DiscoveryAnswerRepository(BaseRepository[DiscoveryAnswer]):
    """Discovery answer repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DiscoveryAnswer)

    async def list_by_assessment(self, assessment_id: str) -> dict[str, Answer]:
        result = await self.db.execute(
            select(DiscoveryAnswer).where(DiscoveryAnswer.assessment_id == assessment_id)
        )
        return {a.discovery_question_id: _to_result(a) for a in result.scalars().all()}

    async def upsert(
        self,
        assessment_id: str,
        question_id: str,
        answer_text: str | None,
        answer_json: Any,
        answered_by: str,
    ) -> Answer:
        """INSERT ... ON CONFLICT (discovery_question_id) DO UPDATE, returning the row."""
        stmt = insert(DiscoveryAnswer).values(
            id=generate_cuid(),
            assessment_id=assessment_id,
            discovery_question_id=question_id,
            answer_text=answer_text,
            answer_json=answer_json,
            answered_by=answered_by,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[DiscoveryAnswer.discovery_question_id],
            set_={
                "answer_text": stmt.excluded.answer_text,
                "answer_json": stmt.excluded.answer_json,
                "answered_by": stmt.excluded.answered_by,
                "updated_at": func.now(),
            },
        ).returning(DiscoveryAnswer)
        result = await self.db.execute(
            stmt, execution_options={"populate_existing": True}
        )
        return _to_result(result.scalar_one())
