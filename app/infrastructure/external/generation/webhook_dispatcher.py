"""Generation dispatcher: starts the external workflow with an HTTP webhook."""

from __future__ import annotations

from dataclasses import asdict

import httpx

from app.application.dtos.generation import DispatchRequest
from app.domain.exceptions import GenerationDispatchError
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Response keys the workflow engine may use for its run identifier.
_EXECUTION_ID_KEYS = ("execution_id", "executionId", "id")


class WebhookGenerationDispatcher:
    """IGenerationDispatcher that POSTs the dispatch request as JSON.

    The workflow reports back through the generation callback endpoint;
    this call only has to be accepted (any 2xx).
    """

    def __init__(self, http_client: httpx.AsyncClient, webhook_url: str | None) -> None:
        self._client = http_client
        self._webhook_url = webhook_url

    async def dispatch(self, request: DispatchRequest) -> str | None:
        if not self._webhook_url:
            raise GenerationDispatchError("generation webhook URL not configured")
        try:
            response = await self._client.post(self._webhook_url, json=asdict(request))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Generation webhook rejected: assessment=%s status=%s",
                request.assessment_id,
                e.response.status_code,
            )
            raise GenerationDispatchError(
                f"workflow returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.warning(
                "Generation webhook unreachable: assessment=%s error=%s",
                request.assessment_id,
                e,
            )
            raise GenerationDispatchError(str(e) or type(e).__name__) from e

        logger.info("Generation dispatched: assessment=%s", request.assessment_id)
        return _execution_id(response)


def _execution_id(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in _EXECUTION_ID_KEYS:
        value = body.get(key)
        if value:
            return str(value)
    return None
