"""Approval gate: the one-way latch that unlocks editing and customer submission."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from app.application.interfaces.repositories import (
    IAssessmentRepository,
    IGenerationJobRepository,
)
from app.application.interfaces.services import INotificationService
from app.domain.entities.assessment import AUTO_APPROVER, ApprovalRecord, AssessmentEntity
from app.domain.enums import GenerationJobState
from app.domain.exceptions import (
    AlreadyApprovedException,
    ApprovalNotAllowedException,
    ResourceNotFoundException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class ApprovalGate:
    """Approve generated requirements once per assessment; never unapprove."""

    def __init__(
        self,
        assessment_repo: IAssessmentRepository,
        job_repo: IGenerationJobRepository,
        notification_service: INotificationService | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.assessment_repo = assessment_repo
        self.job_repo = job_repo
        self.notification_service = notification_service
        self.clock = clock

    async def _get_assessment(self, assessment_id: str) -> AssessmentEntity:
        assessment = await self.assessment_repo.get_by_id(assessment_id)
        if assessment is None:
            raise ResourceNotFoundException("assessment", assessment_id)
        return assessment

    async def approve(self, assessment_id: str, approver: str) -> ApprovalRecord:
        """Manually approve the requirements.

        Raises:
            ResourceNotFoundException: Unknown assessment.
            AlreadyApprovedException: An approval record already exists.
            ApprovalNotAllowedException: Generation has not completed.
        """
        assessment = await self._get_assessment(assessment_id)
        if assessment.is_approved:
            raise AlreadyApprovedException(assessment_id, assessment.approved_by)
        job = await self.job_repo.get_by_assessment(assessment_id)
        job_state = job.state if job else GenerationJobState.NOT_STARTED
        if job_state != GenerationJobState.COMPLETED:
            raise ApprovalNotAllowedException(assessment_id, job_state.value)

        record = ApprovalRecord(approved_at=self.clock(), approved_by=approver)
        written = await self.assessment_repo.set_approval(
            assessment_id, record.approved_at, record.approved_by
        )
        if not written:
            # Another request approved between our read and the conditional write.
            current = await self._get_assessment(assessment_id)
            raise AlreadyApprovedException(assessment_id, current.approved_by)
        logger.info("Requirements approved: assessment=%s by=%s", assessment_id, approver)
        await self._notify(assessment)
        return record

    async def auto_approve(self, assessment_id: str) -> ApprovalRecord | None:
        """Approve on generation completion when the assessment opted in.

        Returns None (no-op) when auto-approve is off or an approval exists.
        """
        assessment = await self._get_assessment(assessment_id)
        if not assessment.auto_approve_requirements or assessment.is_approved:
            return None
        record = ApprovalRecord(approved_at=self.clock(), approved_by=AUTO_APPROVER)
        written = await self.assessment_repo.set_approval(
            assessment_id, record.approved_at, record.approved_by
        )
        if not written:
            return None
        logger.info("Requirements auto-approved: assessment=%s", assessment_id)
        await self._notify(assessment)
        return record

    async def _notify(self, assessment: AssessmentEntity) -> None:
        if self.notification_service is None or not assessment.contact_email:
            return
        await self.notification_service.send(
            to_emails=[assessment.contact_email],
            subject="Your requirements form is ready",
            body=(
                f"Hello {assessment.company_name},\n\n"
                "Your discovery requirements have been approved. "
                "Please sign in to answer the questions and upload the requested documents."
            ),
        )
