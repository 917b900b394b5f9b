"""Background work scheduled by routes after the request transaction commits."""

from __future__ import annotations

import httpx

from app.application.dtos.generation import TriggerResult
from app.core.config import get_settings
from app.infrastructure.persistence.database import session_scope
from app.shared.telemetry.logging import get_logger

from .db import Repositories
from .services import build_generation_dispatcher
from .use_cases import build_supervisor

logger = get_logger(__name__)


async def dispatch_generation(result: TriggerResult, http_client: httpx.AsyncClient) -> None:
    """Start the external workflow for a triggered job in its own transaction.

    A dispatch failure is recorded on the job (state failed, node 'dispatch').
    """
    settings = get_settings()
    dispatcher = build_generation_dispatcher(http_client)
    try:
        async with session_scope() as db:
            supervisor = build_supervisor(Repositories(db))
            await supervisor.dispatch(
                result.job, dispatcher, settings.generation_callback_url
            )
    except Exception:
        logger.exception(
            "Generation dispatch task failed: assessment=%s", result.job.assessment_id
        )
