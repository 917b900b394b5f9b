"""Callbacks from the external generation workflow."""

import hmac
from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request

from app.api.v1.dependencies import get_generation_supervisor
from app.api.v1.endpoints.generation import to_job_response
from app.application.dtos.generation import GenerationCallback
from app.application.use_cases import GenerationJobSupervisor
from app.core.config import get_settings
from app.core.limiter import limit_writes
from app.domain.exceptions import AuthenticationException
from app.schemas.generation import GenerationCallbackRequest, GenerationJobResponse
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _verify_callback_secret(provided: str | None) -> None:
    """Compare X-Callback-Secret with the configured secret (skipped when unset)."""
    configured = get_settings().generation_callback_secret
    if configured is None or not configured.get_secret_value():
        return
    if not provided or not hmac.compare_digest(
        provided.encode(), configured.get_secret_value().encode()
    ):
        logger.warning("Generation callback rejected: bad or missing secret")
        raise AuthenticationException("Invalid callback secret")


@router.post("/generation", response_model=GenerationJobResponse)
@limit_writes
async def generation_callback(
    request: Request,
    body: GenerationCallbackRequest,
    supervisor: Annotated[GenerationJobSupervisor, Depends(get_generation_supervisor)],
    x_callback_secret: Annotated[str | None, Header()] = None,
):
    """Record completion or failure reported by the workflow."""
    _verify_callback_secret(x_callback_secret)
    job = await supervisor.handle_callback(GenerationCallback(**body.model_dump()))
    return to_job_response(job)
