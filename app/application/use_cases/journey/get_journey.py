"""Journey use case: assemble the tracker inputs and derive the stages."""

from __future__ import annotations

from app.application.interfaces.repositories import (
    IAssessmentRepository,
    IGenerationJobRepository,
)
from app.domain.enums import GenerationJobState
from app.domain.exceptions import ResourceNotFoundException
from app.domain.journey import JourneyInputs, JourneyStage, derive_journey


class GetJourneyUseCase:
    """Read-only: derive the journey stages of one assessment."""

    def __init__(
        self,
        assessment_repo: IAssessmentRepository,
        job_repo: IGenerationJobRepository,
    ) -> None:
        self.assessment_repo = assessment_repo
        self.job_repo = job_repo

    async def execute(self, assessment_id: str) -> list[JourneyStage]:
        assessment = await self.assessment_repo.get_by_id(assessment_id)
        if assessment is None:
            raise ResourceNotFoundException("assessment", assessment_id)
        job = await self.job_repo.get_by_assessment(assessment_id)
        inputs = JourneyInputs(
            has_report=assessment.has_report,
            is_converted=assessment.is_converted,
            job_state=job.state if job else GenerationJobState.NOT_STARTED,
            form_status=assessment.form_status,
            approval=assessment.approval,
            prospect_created_at=assessment.prospect_created_at,
            qualified_at=assessment.qualified_at,
            report_delivered_at=assessment.report_delivered_at,
            converted_at=assessment.converted_at,
            job_completed_at=job.completed_at if job else None,
            questions_count=job.questions_count if job else 0,
            submitted_at=assessment.submitted_at,
        )
        return derive_journey(inputs)
