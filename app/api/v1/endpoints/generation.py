"""Generation job API: trigger (admin) and poll (any actor)."""

from datetime import timedelta
from typing import Annotated

import httpx
from fastapi import APIRouter, BackgroundTasks, Depends, Request

from app.api.v1.dependencies import (
    Repositories,
    build_supervisor,
    dispatch_generation,
    get_current_actor,
    get_generation_supervisor_read,
    get_http_client,
    get_notification_service,
    get_read_repositories,
    require_admin,
)
from app.application.dtos.actor import Actor
from app.application.use_cases import GenerationJobSupervisor
from app.core.config import get_settings
from app.core.limiter import limit_generation
from app.domain.entities.generation_job import GenerationJobEntity
from app.infrastructure.services import LogOnlyNotificationService
from app.schemas.generation import (
    GenerationJobResponse,
    GenerationTriggerRequest,
    GenerationTriggerResponse,
)

router = APIRouter()


def to_job_response(job: GenerationJobEntity, taking_too_long: bool = False) -> GenerationJobResponse:
    response = GenerationJobResponse.model_validate(job)
    response.taking_too_long = taking_too_long
    return response


def _timeout_threshold() -> timedelta:
    return timedelta(minutes=get_settings().generation_timeout_minutes)


@router.post(
    "/{assessment_id}/generation",
    response_model=GenerationTriggerResponse,
    status_code=202,
)
@limit_generation
async def trigger_generation(
    request: Request,
    assessment_id: str,
    background_tasks: BackgroundTasks,
    repos: Annotated[Repositories, Depends(get_read_repositories)],
    notifier: Annotated[LogOnlyNotificationService, Depends(get_notification_service)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    _: Annotated[Actor, Depends(require_admin)],
    body: GenerationTriggerRequest | None = None,
):
    """Start or retry requirement generation. Returns 202 immediately.

    The job row is committed before the external workflow is dispatched
    so the workflow's callback always finds it.
    """
    supervisor = build_supervisor(repos, notifier)
    result = await supervisor.trigger(assessment_id, force=bool(body and body.force))
    if result.triggered:
        await repos.commit()
        background_tasks.add_task(dispatch_generation, result, http_client)
    return GenerationTriggerResponse(
        triggered=result.triggered,
        job=to_job_response(
            result.job,
            supervisor.is_taking_too_long(result.job, _timeout_threshold()),
        ),
    )


@router.get("/{assessment_id}/generation", response_model=GenerationJobResponse)
async def get_generation_status(
    assessment_id: str,
    supervisor: Annotated[GenerationJobSupervisor, Depends(get_generation_supervisor_read)],
    _: Annotated[Actor, Depends(get_current_actor)],
):
    """Current job state (not_started when never triggered)."""
    job = await supervisor.poll(assessment_id)
    return to_job_response(job, supervisor.is_taking_too_long(job, _timeout_threshold()))
