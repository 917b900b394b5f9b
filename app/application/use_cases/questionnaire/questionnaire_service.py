"""Questionnaire use cases: read the form, save answers, submit."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

from app.application.dtos.actor import Actor
from app.application.dtos.questionnaire import (
    QuestionnaireView,
    QuestionWithAnswer,
    SaveAnswerCommand,
    SaveAnswerResult,
)
from app.application.interfaces.repositories import (
    IAssessmentRepository,
    IDiscoveryAnswerRepository,
    IDiscoveryQuestionRepository,
    IDocumentRequestRepository,
    IGenerationJobRepository,
)
from app.domain.access import ensure_can_write
from app.domain.entities.assessment import AssessmentEntity
from app.domain.entities.questionnaire import unanswered_required
from app.domain.enums import FormSubmissionStatus, GenerationJobState
from app.domain.exceptions import (
    AuthorizationException,
    FormLockedException,
    RequiredQuestionsUnansweredException,
    ResourceNotFoundException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


def _normalize_answer(text: str | None, value: Any) -> tuple[str | None, Any]:
    """Empty strings and empty collections are stored as null."""
    if text is not None and text == "":
        text = None
    if value in ("", [], {}):
        value = None
    return text, value


class QuestionnaireService:
    """Single responsibility: the requirements form of one assessment."""

    def __init__(
        self,
        assessment_repo: IAssessmentRepository,
        job_repo: IGenerationJobRepository,
        question_repo: IDiscoveryQuestionRepository,
        answer_repo: IDiscoveryAnswerRepository,
        document_request_repo: IDocumentRequestRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.assessment_repo = assessment_repo
        self.job_repo = job_repo
        self.question_repo = question_repo
        self.answer_repo = answer_repo
        self.document_request_repo = document_request_repo
        self.clock = clock

    async def _get_assessment(self, assessment_id: str) -> AssessmentEntity:
        assessment = await self.assessment_repo.get_by_id(assessment_id)
        if assessment is None:
            raise ResourceNotFoundException("assessment", assessment_id)
        return assessment

    async def get_questionnaire(self, actor: Actor, assessment_id: str) -> QuestionnaireView:
        """Return questions with current answers, document requests and form status.

        Customers see the form only after approval. Questions are empty until
        generation completed.
        """
        assessment = await self._get_assessment(assessment_id)
        if actor.is_customer and not assessment.is_approved:
            raise AuthorizationException(
                "questionnaire",
                "read",
                message="Requirements have not been approved yet",
            )
        job = await self.job_repo.get_by_assessment(assessment_id)
        job_state = job.state if job else GenerationJobState.NOT_STARTED

        questions: list[QuestionWithAnswer] = []
        requests = []
        if job_state == GenerationJobState.COMPLETED:
            answers = await self.answer_repo.list_by_assessment(assessment_id)
            questions = [
                QuestionWithAnswer(question=q, answer=answers.get(q.id))
                for q in await self.question_repo.list_by_assessment(assessment_id)
            ]
            requests = await self.document_request_repo.list_by_assessment(assessment_id)

        return QuestionnaireView(
            assessment_id=assessment_id,
            company_name=assessment.company_name,
            job_state=job_state,
            form_status=assessment.form_status,
            approval=assessment.approval,
            questions=questions,
            document_requests=requests,
            submitted_at=assessment.submitted_at,
        )

    async def save_answer(self, actor: Actor, command: SaveAnswerCommand) -> SaveAnswerResult:
        """Upsert the answer for one question and return the server timestamp.

        Raises:
            ResourceNotFoundException: Unknown assessment, or the question does
                not belong to it.
            AuthorizationException: Requirements not approved yet.
            FormLockedException: Customer writing to a submitted form.
        """
        assessment = await self._get_assessment(command.assessment_id)
        question = await self.question_repo.get_by_id(command.question_id)
        if question is None or question.assessment_id != command.assessment_id:
            raise ResourceNotFoundException("question", command.question_id)
        ensure_can_write(actor.role, assessment, "answer")

        text, value = _normalize_answer(command.answer_text, command.answer_json)
        answer = await self.answer_repo.upsert(
            assessment_id=command.assessment_id,
            question_id=command.question_id,
            answer_text=text,
            answer_json=value,
            answered_by=actor.identity,
        )
        saved_at = answer.updated_at or self.clock()
        logger.debug(
            "Answer saved: assessment=%s question=%s by=%s",
            command.assessment_id,
            command.question_id,
            actor.role.value,
        )
        return SaveAnswerResult(question_id=command.question_id, saved_at=saved_at)

    async def submit_form(self, actor: Actor, assessment_id: str) -> datetime:
        """Customer submits the form; one-way transition to completed.

        Raises:
            AuthorizationException: Not the customer, or not approved.
            FormLockedException: Already submitted.
            RequiredQuestionsUnansweredException: Required questions missing.
        """
        if not actor.is_customer:
            raise AuthorizationException(
                "questionnaire", "submit", message="Only the customer can submit the form"
            )
        assessment = await self._get_assessment(assessment_id)
        if not assessment.is_approved:
            raise AuthorizationException(
                "questionnaire",
                "submit",
                message="Requirements have not been approved yet",
            )
        if assessment.form_status == FormSubmissionStatus.COMPLETED:
            raise FormLockedException(assessment_id)

        questions = await self.question_repo.list_by_assessment(assessment_id)
        answers = await self.answer_repo.list_by_assessment(assessment_id)
        missing = unanswered_required(questions, answers)
        if missing:
            raise RequiredQuestionsUnansweredException(assessment_id, missing)

        submitted_at = self.clock()
        if not await self.assessment_repo.set_submitted(assessment_id, submitted_at):
            raise FormLockedException(assessment_id)
        logger.info("Requirements form submitted: assessment=%s", assessment_id)
        return submitted_at
