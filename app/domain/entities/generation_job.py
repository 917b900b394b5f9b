"""Generation job domain entity.

One job per assessment generates the discovery questions and document
requests. The job runs in an external workflow engine; this entity only
tracks its observable state and enforces the allowed transitions.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from app.domain.enums import GenerationJobState
from app.domain.exceptions import JobTransitionException

DEFAULT_UNKNOWN_ERROR = "Unknown error"


@dataclass
class GenerationJobEntity:
    """Observable state of the requirement-generation job for one assessment."""

    assessment_id: str
    state: GenerationJobState = GenerationJobState.NOT_STARTED
    id: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    duration_seconds: int | None = None
    error_message: str | None = None
    error_detail: dict[str, Any] | None = None
    questions_count: int = 0
    documents_count: int = 0
    retry_count: int = 0
    external_execution_id: str | None = None

    def can_trigger(self, force: bool = False) -> bool:
        """Return whether trigger() would start (or restart) the job."""
        if self.state in (GenerationJobState.NOT_STARTED, GenerationJobState.FAILED):
            return True
        return self.state == GenerationJobState.RUNNING and force

    def start(self, now: datetime, force: bool = False) -> bool:
        """Move the job to running.

        Returns False (and changes nothing) when the job is already running
        and force is not set. Raises JobTransitionException for a completed job.
        """
        if self.state == GenerationJobState.COMPLETED:
            raise JobTransitionException(self.assessment_id, self.state.value, "trigger")
        if not self.can_trigger(force):
            return False
        if self.state != GenerationJobState.NOT_STARTED:
            self.retry_count += 1
        self.state = GenerationJobState.RUNNING
        self.started_at = now
        self.completed_at = None
        self.duration_seconds = None
        self.error_message = None
        self.error_detail = None
        self.external_execution_id = None
        return True

    def complete(
        self,
        now: datetime,
        questions_count: int,
        documents_count: int,
        external_execution_id: str | None = None,
    ) -> None:
        """Record successful completion. Only allowed from running."""
        self._require_running("complete")
        self.state = GenerationJobState.COMPLETED
        self.completed_at = now
        self.duration_seconds = self._elapsed_seconds(now)
        self.questions_count = questions_count
        self.documents_count = documents_count
        self.error_message = None
        self.error_detail = None
        if external_execution_id:
            self.external_execution_id = external_execution_id

    def fail(
        self,
        now: datetime,
        message: str | None,
        node: str | None = None,
        external_execution_id: str | None = None,
    ) -> None:
        """Record failure with a message and the failing step. Only allowed from running."""
        self._require_running("fail")
        text = message or DEFAULT_UNKNOWN_ERROR
        self.state = GenerationJobState.FAILED
        self.completed_at = now
        self.duration_seconds = self._elapsed_seconds(now)
        self.error_message = text
        self.error_detail = {"node": node, "raw_error": text}
        if external_execution_id:
            self.external_execution_id = external_execution_id

    def is_taking_too_long(self, now: datetime, threshold: timedelta) -> bool:
        """Advisory: running for longer than threshold. Never changes state."""
        if self.state != GenerationJobState.RUNNING or self.started_at is None:
            return False
        return now - self.started_at > threshold

    def _require_running(self, attempted: str) -> None:
        if self.state != GenerationJobState.RUNNING:
            raise JobTransitionException(self.assessment_id, self.state.value, attempted)

    def _elapsed_seconds(self, now: datetime) -> int | None:
        if self.started_at is None:
            return None
        return max(0, int((now - self.started_at).total_seconds()))
