"""Unit tests for QuestionnaireService (read, autosave upsert, submit)."""

import pytest

from app.application.dtos.questionnaire import SaveAnswerCommand
from app.application.use_cases import QuestionnaireService
from app.domain.entities.generation_job import GenerationJobEntity
from app.domain.entities.questionnaire import Answer
from app.domain.enums import AnswerFormat, FormSubmissionStatus, GenerationJobState
from app.domain.exceptions import (
    AuthorizationException,
    FormLockedException,
    RequiredQuestionsUnansweredException,
    ResourceNotFoundException,
)


@pytest.fixture
def service(repos, clock) -> QuestionnaireService:
    return QuestionnaireService(
        assessment_repo=repos.assessments,
        job_repo=repos.jobs,
        question_repo=repos.questions,
        answer_repo=repos.answers,
        document_request_repo=repos.document_requests,
        clock=clock,
    )


@pytest.fixture
def approved(repos, clock, assessment_factory, question_factory):
    """Assessment with completed generation, approval, one required and one optional question."""
    repos.assessments.add(
        assessment_factory("asm-1", approved_at=clock.now, approved_by="consultant")
    )
    repos.jobs.add(GenerationJobEntity(assessment_id="asm-1", state=GenerationJobState.COMPLETED))
    repos.questions.add(
        question_factory("q1", is_required=True, display_order=1),
        question_factory(
            "q2",
            answer_format=AnswerFormat.SELECT_MANY,
            options=["ERP", "CRM"],
            display_order=2,
        ),
    )


async def test_questionnaire_lists_questions_with_answers(service, repos, admin, approved) -> None:
    await repos.answers.upsert("asm-1", "q1", "Twelve people", None, "owner@acme.test")
    view = await service.get_questionnaire(admin, "asm-1")
    assert [item.question.id for item in view.questions] == ["q1", "q2"]
    assert view.questions[0].answer.answer_text == "Twelve people"
    assert view.questions[1].answer is None
    assert view.form_status == FormSubmissionStatus.IN_REVIEW


async def test_questions_hidden_until_generation_completes(
    service, repos, admin, assessment_factory, question_factory
) -> None:
    repos.assessments.add(assessment_factory("asm-1"))
    repos.jobs.add(GenerationJobEntity(assessment_id="asm-1", state=GenerationJobState.RUNNING))
    repos.questions.add(question_factory("q1"))
    view = await service.get_questionnaire(admin, "asm-1")
    assert view.questions == []
    assert view.job_state == GenerationJobState.RUNNING


async def test_customer_cannot_read_before_approval(service, repos, customer, assessment_factory) -> None:
    repos.assessments.add(assessment_factory("asm-1"))
    with pytest.raises(AuthorizationException):
        await service.get_questionnaire(customer, "asm-1")


async def test_save_answer_upserts_and_returns_timestamp(service, repos, customer, clock, approved) -> None:
    result = await service.save_answer(
        customer, SaveAnswerCommand("asm-1", "q1", answer_text="About 40")
    )
    assert result.saved_at == clock.now
    clock.advance(seconds=5)
    await service.save_answer(customer, SaveAnswerCommand("asm-1", "q1", answer_text="About 45"))
    answers = await repos.answers.list_by_assessment("asm-1")
    assert len(answers) == 1
    assert answers["q1"].answer_text == "About 45"
    assert answers["q1"].answered_by == customer.identity


async def test_empty_values_stored_as_null(service, repos, customer, approved) -> None:
    await service.save_answer(customer, SaveAnswerCommand("asm-1", "q2", answer_text="", answer_json=[]))
    answer = (await repos.answers.list_by_assessment("asm-1"))["q2"]
    assert answer.answer_text is None
    assert answer.answer_json is None


async def test_save_rejected_before_approval(
    service, repos, admin, assessment_factory, question_factory
) -> None:
    repos.assessments.add(assessment_factory("asm-1"))
    repos.questions.add(question_factory("q1"))
    with pytest.raises(AuthorizationException):
        await service.save_answer(admin, SaveAnswerCommand("asm-1", "q1", answer_text="x"))


async def test_save_question_of_other_assessment(service, repos, customer, approved, question_factory) -> None:
    repos.questions.add(question_factory("foreign", assessment_id="asm-2"))
    with pytest.raises(ResourceNotFoundException):
        await service.save_answer(customer, SaveAnswerCommand("asm-1", "foreign", answer_text="x"))


async def test_submit_requires_required_answers(service, customer, approved) -> None:
    with pytest.raises(RequiredQuestionsUnansweredException) as exc_info:
        await service.submit_form(customer, "asm-1")
    assert exc_info.value.details["missing_question_ids"] == ["q1"]


async def test_submit_locks_form_for_customer(service, repos, customer, admin, clock, approved) -> None:
    await service.save_answer(customer, SaveAnswerCommand("asm-1", "q1", answer_text="40"))
    submitted_at = await service.submit_form(customer, "asm-1")
    assert submitted_at == clock.now
    assert repos.assessments.items["asm-1"].form_status == FormSubmissionStatus.COMPLETED

    with pytest.raises(FormLockedException):
        await service.save_answer(customer, SaveAnswerCommand("asm-1", "q1", answer_text="41"))
    with pytest.raises(FormLockedException):
        await service.submit_form(customer, "asm-1")
    # Admin edits after submission are still allowed.
    await service.save_answer(admin, SaveAnswerCommand("asm-1", "q1", answer_text="42"))


async def test_admin_cannot_submit(service, admin, approved) -> None:
    with pytest.raises(AuthorizationException):
        await service.submit_form(admin, "asm-1")


async def test_submit_before_approval_rejected(service, repos, customer, assessment_factory) -> None:
    repos.assessments.add(assessment_factory("asm-1"))
    with pytest.raises(AuthorizationException):
        await service.submit_form(customer, "asm-1")


async def test_structured_answer_counts_as_answered(service, repos, customer, approved) -> None:
    repos.answers.items[("asm-1", "q1")] = Answer(
        question_id="q1", assessment_id="asm-1", answer_json={"value": 4}
    )
    await service.submit_form(customer, "asm-1")
