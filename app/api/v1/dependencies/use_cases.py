"""Use case dependencies (composition root).

Routes depend only on these builders, never on repositories directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.application.use_cases import (
    ApprovalGate,
    DocumentSlotService,
    GenerationJobSupervisor,
    GetJourneyUseCase,
    QuestionnaireService,
)
from app.core.config import get_settings
from app.domain.value_objects.upload import UploadPolicy
from app.infrastructure.external.storage.local_storage import LocalStorageService
from app.infrastructure.services import LogOnlyNotificationService

from .db import Repositories, get_read_repositories, get_write_repositories
from .services import get_notification_service, get_storage_service

ReadRepos = Annotated[Repositories, Depends(get_read_repositories)]
WriteRepos = Annotated[Repositories, Depends(get_write_repositories)]
Notifier = Annotated[LogOnlyNotificationService, Depends(get_notification_service)]
Storage = Annotated[LocalStorageService, Depends(get_storage_service)]


def build_approval_gate(
    repos: Repositories, notifier: LogOnlyNotificationService | None = None
) -> ApprovalGate:
    return ApprovalGate(repos.assessments, repos.jobs, notification_service=notifier)


def build_supervisor(
    repos: Repositories, notifier: LogOnlyNotificationService | None = None
) -> GenerationJobSupervisor:
    """Supervisor wired with the approval gate used for auto-approval on completion."""
    return GenerationJobSupervisor(
        job_repo=repos.jobs,
        assessment_repo=repos.assessments,
        question_repo=repos.questions,
        document_request_repo=repos.document_requests,
        approval_gate=build_approval_gate(repos, notifier),
    )


def build_upload_policy() -> UploadPolicy:
    settings = get_settings()
    return UploadPolicy(
        max_size=settings.max_upload_size,
        accepted_types=settings.accepted_mime_types,
    )


async def get_generation_supervisor(
    repos: WriteRepos, notifier: Notifier
) -> GenerationJobSupervisor:
    """Supervisor for trigger and callback (write transaction)."""
    return build_supervisor(repos, notifier)


async def get_generation_supervisor_read(repos: ReadRepos) -> GenerationJobSupervisor:
    """Supervisor for polling (no transaction)."""
    return build_supervisor(repos)


async def get_approval_gate(repos: WriteRepos, notifier: Notifier) -> ApprovalGate:
    return build_approval_gate(repos, notifier)


def _questionnaire_service(repos: Repositories) -> QuestionnaireService:
    return QuestionnaireService(
        assessment_repo=repos.assessments,
        job_repo=repos.jobs,
        question_repo=repos.questions,
        answer_repo=repos.answers,
        document_request_repo=repos.document_requests,
    )


async def get_questionnaire_service(repos: ReadRepos) -> QuestionnaireService:
    return _questionnaire_service(repos)


async def get_questionnaire_service_for_write(repos: WriteRepos) -> QuestionnaireService:
    return _questionnaire_service(repos)


def _document_slot_service(repos: Repositories, storage: LocalStorageService) -> DocumentSlotService:
    return DocumentSlotService(
        storage_service=storage,
        upload_repo=repos.uploads,
        document_request_repo=repos.document_requests,
        assessment_repo=repos.assessments,
        policy=build_upload_policy(),
    )


async def get_document_slot_service(repos: ReadRepos, storage: Storage) -> DocumentSlotService:
    return _document_slot_service(repos, storage)


async def get_document_slot_service_for_write(
    repos: WriteRepos, storage: Storage
) -> DocumentSlotService:
    return _document_slot_service(repos, storage)


async def get_journey_use_case(repos: ReadRepos) -> GetJourneyUseCase:
    return GetJourneyUseCase(repos.assessments, repos.jobs)
