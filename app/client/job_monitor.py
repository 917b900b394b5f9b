"""Client-side monitor for the requirement-generation job.

Polls the job status only while it is running, stops on completed or
failed, and forces a retry only once the run is taking too long. Failures
are never retried automatically.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from app.client.api_client import ApiError, parse_timestamp
from app.client.gateways import GenerationGateway
from app.domain.enums import GenerationJobState
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import ensure_utc, utc_now

logger = get_logger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 5.0
DEFAULT_TIMEOUT_THRESHOLD = timedelta(minutes=10)


class GenerationJobMonitor:
    """Tracks one assessment's job through the status endpoint."""

    def __init__(
        self,
        gateway: GenerationGateway,
        assessment_id: str,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        timeout_threshold: timedelta = DEFAULT_TIMEOUT_THRESHOLD,
        clock: Callable[[], datetime] = utc_now,
        on_change: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        self.gateway = gateway
        self.assessment_id = assessment_id
        self.poll_interval = poll_interval
        self.timeout_threshold = timeout_threshold
        self.clock = clock
        self.on_change = on_change
        self.job: dict[str, Any] | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> GenerationJobState:
        if self.job is None:
            return GenerationJobState.NOT_STARTED
        return GenerationJobState(self.job["state"])

    @property
    def error_message(self) -> str | None:
        return self.job.get("error_message") if self.job else None

    @property
    def is_polling(self) -> bool:
        return self._task is not None and not self._task.done()

    def is_taking_too_long(self) -> bool:
        """Advisory: running longer than the threshold (offer a forced retry)."""
        if self.state != GenerationJobState.RUNNING or self.job is None:
            return False
        started_at = ensure_utc(parse_timestamp(self.job.get("started_at")))
        if started_at is None:
            return False
        return self.clock() - started_at > self.timeout_threshold

    def _apply(self, job: dict[str, Any]) -> None:
        previous = self.state
        self.job = job
        if self.on_change is not None and self.state != previous:
            self.on_change(job)

    async def _sync_polling(self) -> None:
        if self.state == GenerationJobState.RUNNING:
            self._start_polling()
        elif self.is_polling:
            await self.stop()

    async def refresh(self) -> dict[str, Any]:
        """Fetch the job once and start or stop polling to match its state."""
        self._apply(await self.gateway.get_generation(self.assessment_id))
        await self._sync_polling()
        return self.job or {}

    async def retry(self, force: bool | None = None) -> bool:
        """Trigger the job again and resume polling.

        force defaults to is_taking_too_long(): a running job within the
        threshold is left alone by the server. Returns whether the server
        actually started a new run.
        """
        if force is None:
            force = self.is_taking_too_long()
        result = await self.gateway.trigger_generation(self.assessment_id, force=force)
        self._apply(result["job"])
        await self._sync_polling()
        return bool(result.get("triggered"))

    def _start_polling(self) -> None:
        if self.is_polling:
            return
        self._task = asyncio.create_task(self._poll_loop())

    async def _poll_loop(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            try:
                self._apply(await self.gateway.get_generation(self.assessment_id))
            except ApiError as e:
                logger.warning(
                    "Job status poll failed: assessment=%s error=%s",
                    self.assessment_id,
                    e.message,
                )
                continue
            if self.state != GenerationJobState.RUNNING:
                logger.info(
                    "Generation finished: assessment=%s state=%s",
                    self.assessment_id,
                    self.state.value,
                )
                return

    async def wait(self) -> GenerationJobState:
        """Wait until polling stops; returns the final observed state."""
        if self._task is not None:
            await asyncio.wait({self._task})
        return self.state

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
