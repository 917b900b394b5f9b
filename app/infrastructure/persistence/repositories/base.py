"""Base repository: shared ORM access for the assessment-scoped repositories."""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with ORM-level get, add, delete and per-assessment count.

    Public methods of subclasses return domain entities; the helpers here
    work on ORM instances and stay inside the infrastructure layer.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_model(self, entity_id: str) -> ModelType | None:
        """Return a single ORM record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _add(self, obj: ModelType) -> ModelType:
        """Persist a new record; refresh so server defaults (timestamps) are loaded."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _delete_by_id(self, entity_id: str) -> bool:
        """Delete by primary key; return True if a row was deleted."""
        obj = await self._get_model(entity_id)
        if obj is None:
            return False
        await self.db.delete(obj)
        await self.db.flush()
        return True

    async def _count_for_assessment(self, assessment_id: str) -> int:
        model: Any = self.model
        result = await self.db.execute(
            select(func.count()).select_from(self.model).where(
                model.assessment_id == assessment_id
            )
        )
        return int(result.scalar_one())
