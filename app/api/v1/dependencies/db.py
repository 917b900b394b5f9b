"""Repository dependencies (composition root).

Read endpoints get repositories bound to a plain session (get_db); write
endpoints use get_db_transactional so the whole request commits or rolls
back together.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    AssessmentRepository,
    DiscoveryAnswerRepository,
    DiscoveryQuestionRepository,
    DocumentRequestRepository,
    DocumentUploadRepository,
    GenerationJobRepository,
)

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


class Repositories:
    """All repositories bound to one session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.assessments = AssessmentRepository(db)
        self.jobs = GenerationJobRepository(db)
        self.questions = DiscoveryQuestionRepository(db)
        self.answers = DiscoveryAnswerRepository(db)
        self.document_requests = DocumentRequestRepository(db)
        self.uploads = DocumentUploadRepository(db)

    async def commit(self) -> None:
        """Commit explicitly (read sessions used for work scheduled after the request)."""
        await self.db.commit()


async def get_read_repositories(db: ReadSession) -> Repositories:
    return Repositories(db)


async def get_write_repositories(db: WriteSession) -> Repositories:
    return Repositories(db)
