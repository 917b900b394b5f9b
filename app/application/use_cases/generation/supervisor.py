"""Generation job supervisor: trigger, poll, and record the external job's outcome.

The generation itself runs out of process. This use case owns the job row:
it starts (or restarts) the job, hands the dispatch to the external workflow,
and applies the completion/failure callback. Failures are recorded, never
retried automatically; the only way out of failed is another trigger().
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from app.application.dtos.generation import (
    DispatchRequest,
    GenerationCallback,
    TriggerResult,
)
from app.application.interfaces.repositories import (
    IAssessmentRepository,
    IDiscoveryQuestionRepository,
    IDocumentRequestRepository,
    IGenerationJobRepository,
)
from app.application.interfaces.services import IGenerationDispatcher
from app.application.use_cases.approval.approval_gate import ApprovalGate
from app.domain.entities.generation_job import GenerationJobEntity
from app.domain.enums import GenerationJobState
from app.domain.exceptions import (
    GenerationDispatchError,
    JobTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

DEFAULT_TIMEOUT_THRESHOLD = timedelta(minutes=10)
DISPATCH_NODE = "dispatch"


class GenerationJobSupervisor:
    """Owns the generation job state machine for each assessment."""

    def __init__(
        self,
        job_repo: IGenerationJobRepository,
        assessment_repo: IAssessmentRepository,
        question_repo: IDiscoveryQuestionRepository,
        document_request_repo: IDocumentRequestRepository,
        approval_gate: ApprovalGate | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.job_repo = job_repo
        self.assessment_repo = assessment_repo
        self.question_repo = question_repo
        self.document_request_repo = document_request_repo
        self.approval_gate = approval_gate
        self.clock = clock

    async def _ensure_assessment(self, assessment_id: str) -> None:
        if await self.assessment_repo.get_by_id(assessment_id) is None:
            raise ResourceNotFoundException("assessment", assessment_id)

    async def _get_running_job(self, assessment_id: str) -> GenerationJobEntity:
        job = await self.job_repo.get_by_assessment(assessment_id)
        if job is None:
            raise JobTransitionException(
                assessment_id, GenerationJobState.NOT_STARTED.value, "finish"
            )
        return job

    async def trigger(self, assessment_id: str, force: bool = False) -> TriggerResult:
        """Start or retry the job.

        Allowed from not_started and failed, and from running only with force
        (retry after a perceived timeout). A running job without force is left
        untouched and triggered is False. A completed job cannot be re-run.
        The caller dispatches the external workflow after the transaction commits.
        """
        await self._ensure_assessment(assessment_id)
        # Held until commit, so concurrent triggers see each other's state.
        job = await self.job_repo.lock_for_trigger(assessment_id)
        if not job.start(self.clock(), force=force):
            logger.info(
                "Generation already running, trigger ignored: assessment=%s",
                assessment_id,
            )
            return TriggerResult(triggered=False, job=job)
        saved = await self.job_repo.save(job)
        logger.info(
            "Generation job started: assessment=%s retry_count=%s force=%s",
            assessment_id,
            saved.retry_count,
            force,
        )
        return TriggerResult(triggered=True, job=saved)

    async def poll(self, assessment_id: str) -> GenerationJobEntity:
        """Read-only view of the job; a never-triggered job reads as not_started."""
        await self._ensure_assessment(assessment_id)
        job = await self.job_repo.get_by_assessment(assessment_id)
        return job or GenerationJobEntity(assessment_id=assessment_id)

    def is_taking_too_long(
        self,
        job: GenerationJobEntity,
        threshold: timedelta = DEFAULT_TIMEOUT_THRESHOLD,
    ) -> bool:
        return job.is_taking_too_long(self.clock(), threshold)

    async def record_completion(
        self,
        assessment_id: str,
        external_execution_id: str | None = None,
        reported_questions: int | None = None,
        reported_documents: int | None = None,
    ) -> GenerationJobEntity:
        """Mark the running job completed with counts taken from the stored rows."""
        job = await self._get_running_job(assessment_id)
        questions = await self.question_repo.count_by_assessment(assessment_id)
        documents = await self.document_request_repo.count_by_assessment(assessment_id)
        if reported_questions is not None and reported_questions != questions:
            logger.warning(
                "Reported question count %s differs from stored %s: assessment=%s",
                reported_questions,
                questions,
                assessment_id,
            )
        if reported_documents is not None and reported_documents != documents:
            logger.warning(
                "Reported document count %s differs from stored %s: assessment=%s",
                reported_documents,
                documents,
                assessment_id,
            )
        job.complete(self.clock(), questions, documents, external_execution_id)
        saved = await self.job_repo.save(job)
        logger.info(
            "Generation job completed: assessment=%s questions=%s documents=%s duration=%ss",
            assessment_id,
            questions,
            documents,
            saved.duration_seconds,
        )
        if self.approval_gate is not None:
            await self.approval_gate.auto_approve(assessment_id)
        return saved

    async def record_failure(
        self,
        assessment_id: str,
        message: str | None,
        node: str | None = None,
        external_execution_id: str | None = None,
    ) -> GenerationJobEntity:
        """Mark the running job failed with a message and the failing step."""
        job = await self._get_running_job(assessment_id)
        job.fail(self.clock(), message, node=node, external_execution_id=external_execution_id)
        saved = await self.job_repo.save(job)
        logger.warning(
            "Generation job failed: assessment=%s node=%s error=%s",
            assessment_id,
            node,
            saved.error_message,
        )
        return saved

    async def handle_callback(self, callback: GenerationCallback) -> GenerationJobEntity:
        """Apply the external workflow's completion or failure report."""
        if callback.status == GenerationJobState.COMPLETED.value:
            return await self.record_completion(
                callback.assessment_id,
                external_execution_id=callback.external_execution_id,
                reported_questions=callback.questions_count,
                reported_documents=callback.documents_count,
            )
        if callback.status == GenerationJobState.FAILED.value:
            return await self.record_failure(
                callback.assessment_id,
                callback.error_message,
                node=callback.error_node,
                external_execution_id=callback.external_execution_id,
            )
        raise ValidationException(
            f"status must be 'completed' or 'failed', got {callback.status!r}",
            field="status",
        )

    async def dispatch(
        self,
        job: GenerationJobEntity,
        dispatcher: IGenerationDispatcher,
        callback_url: str,
    ) -> GenerationJobEntity | None:
        """Start the external workflow for a freshly triggered job.

        A dispatch error marks the job failed (node 'dispatch') so the user
        sees it and can retry. Returns the failed job, or None on success.
        """
        assessment = await self.assessment_repo.get_by_id(job.assessment_id)
        request = DispatchRequest(
            assessment_id=job.assessment_id,
            generation_job_id=job.id or "",
            callback_url=callback_url,
            auto_approve=bool(assessment and assessment.auto_approve_requirements),
        )
        try:
            execution_id = await dispatcher.dispatch(request)
        except GenerationDispatchError as e:
            current = await self.job_repo.get_by_assessment(job.assessment_id)
            if (
                current is None
                or current.state != GenerationJobState.RUNNING
                or current.started_at != job.started_at
            ):
                # Finished or restarted meanwhile; this run's failure is stale.
                logger.warning(
                    "Dispatch failed for a superseded run: assessment=%s",
                    job.assessment_id,
                )
                return None
            return await self.record_failure(
                job.assessment_id, e.message, node=DISPATCH_NODE
            )
        logger.info(
            "Generation workflow dispatched: assessment=%s execution=%s",
            job.assessment_id,
            execution_id,
        )
        return None
