"""Tests for domain entities (GenerationJobEntity, AssessmentEntity) and enums."""

from datetime import datetime, timedelta, timezone

import pytest

from app.domain.entities.assessment import AUTO_APPROVER, AssessmentEntity
from app.domain.entities.generation_job import DEFAULT_UNKNOWN_ERROR, GenerationJobEntity
from app.domain.enums import (
    ActorRole,
    AnswerFormat,
    FormSubmissionStatus,
    GenerationJobState,
)
from app.domain.exceptions import JobTransitionException

T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestEnums:
    """values() helper and format classification."""

    def test_job_state_values(self) -> None:
        assert GenerationJobState.values() == ["not_started", "running", "completed", "failed"]

    def test_terminal_states(self) -> None:
        assert GenerationJobState.COMPLETED.is_terminal
        assert GenerationJobState.FAILED.is_terminal
        assert not GenerationJobState.RUNNING.is_terminal
        assert not GenerationJobState.NOT_STARTED.is_terminal

    def test_debounced_formats_are_free_form(self) -> None:
        debounced = {f for f in AnswerFormat if f.is_debounced}
        assert debounced == {AnswerFormat.TEXT, AnswerFormat.NUMBER, AnswerFormat.PERCENTAGE}

    def test_option_formats(self) -> None:
        assert AnswerFormat.SELECT_ONE.has_options
        assert AnswerFormat.SELECT_MANY.has_options
        assert not AnswerFormat.YES_NO.has_options

    def test_actor_roles(self) -> None:
        assert ActorRole.values() == ["admin", "customer"]


class TestGenerationJobStart:
    """GenerationJobEntity.start transitions."""

    def test_not_started_to_running(self) -> None:
        job = GenerationJobEntity(assessment_id="a1")
        assert job.start(T0) is True
        assert job.state == GenerationJobState.RUNNING
        assert job.started_at == T0
        assert job.retry_count == 0

    def test_running_without_force_is_noop(self) -> None:
        job = GenerationJobEntity(
            assessment_id="a1", id="j1", state=GenerationJobState.RUNNING, started_at=T0
        )
        assert job.start(T0 + timedelta(minutes=1)) is False
        assert job.started_at == T0
        assert job.retry_count == 0

    def test_running_with_force_restarts(self) -> None:
        later = T0 + timedelta(minutes=15)
        job = GenerationJobEntity(
            assessment_id="a1", id="j1", state=GenerationJobState.RUNNING, started_at=T0
        )
        assert job.start(later, force=True) is True
        assert job.started_at == later
        assert job.retry_count == 1

    def test_failed_retry_clears_error(self) -> None:
        job = GenerationJobEntity(
            assessment_id="a1",
            id="j1",
            state=GenerationJobState.FAILED,
            started_at=T0,
            completed_at=T0,
            error_message="boom",
            error_detail={"node": "questions", "raw_error": "boom"},
        )
        assert job.start(T0 + timedelta(hours=1)) is True
        assert job.state == GenerationJobState.RUNNING
        assert job.error_message is None
        assert job.error_detail is None
        assert job.completed_at is None
        assert job.retry_count == 1

    def test_completed_cannot_restart(self) -> None:
        job = GenerationJobEntity(assessment_id="a1", state=GenerationJobState.COMPLETED)
        with pytest.raises(JobTransitionException) as exc_info:
            job.start(T0, force=True)
        assert exc_info.value.error_code == "JOB_TRANSITION_ERROR"
        assert exc_info.value.details["current_state"] == "completed"

    def test_can_trigger(self) -> None:
        assert GenerationJobEntity(assessment_id="a1").can_trigger()
        running = GenerationJobEntity(assessment_id="a1", state=GenerationJobState.RUNNING)
        assert not running.can_trigger()
        assert running.can_trigger(force=True)
        done = GenerationJobEntity(assessment_id="a1", state=GenerationJobState.COMPLETED)
        assert not done.can_trigger(force=True)


class TestGenerationJobFinish:
    """complete() and fail() are only allowed from running."""

    def _running(self) -> GenerationJobEntity:
        return GenerationJobEntity(
            assessment_id="a1", id="j1", state=GenerationJobState.RUNNING, started_at=T0
        )

    def test_complete_records_counts_and_duration(self) -> None:
        job = self._running()
        job.complete(T0 + timedelta(seconds=95), questions_count=12, documents_count=4)
        assert job.state == GenerationJobState.COMPLETED
        assert job.duration_seconds == 95
        assert job.questions_count == 12
        assert job.documents_count == 4

    def test_fail_records_node_and_message(self) -> None:
        job = self._running()
        job.fail(T0 + timedelta(seconds=3), "LLM timeout", node="questions")
        assert job.state == GenerationJobState.FAILED
        assert job.error_message == "LLM timeout"
        assert job.error_detail == {"node": "questions", "raw_error": "LLM timeout"}

    def test_fail_without_message_uses_default(self) -> None:
        job = self._running()
        job.fail(T0, None)
        assert job.error_message == DEFAULT_UNKNOWN_ERROR

    @pytest.mark.parametrize(
        "state", [GenerationJobState.NOT_STARTED, GenerationJobState.COMPLETED, GenerationJobState.FAILED]
    )
    def test_complete_outside_running_raises(self, state: GenerationJobState) -> None:
        job = GenerationJobEntity(assessment_id="a1", state=state)
        with pytest.raises(JobTransitionException):
            job.complete(T0, 1, 1)

    def test_fail_after_completed_raises(self) -> None:
        job = self._running()
        job.complete(T0, 1, 1)
        with pytest.raises(JobTransitionException):
            job.fail(T0, "late failure")
        assert job.state == GenerationJobState.COMPLETED


class TestTakingTooLong:
    def test_only_running_jobs_can_take_too_long(self) -> None:
        threshold = timedelta(minutes=10)
        job = GenerationJobEntity(
            assessment_id="a1", state=GenerationJobState.RUNNING, started_at=T0
        )
        assert not job.is_taking_too_long(T0 + timedelta(minutes=10), threshold)
        assert job.is_taking_too_long(T0 + timedelta(minutes=10, seconds=1), threshold)
        job.state = GenerationJobState.FAILED
        assert not job.is_taking_too_long(T0 + timedelta(hours=1), threshold)


class TestAssessmentFormStatus:
    """Derived form status and approval record."""

    def test_draft_before_approval(self) -> None:
        a = AssessmentEntity(id="a1", company_name="Acme")
        assert a.form_status == FormSubmissionStatus.DRAFT
        assert a.approval is None

    def test_in_review_after_approval(self) -> None:
        a = AssessmentEntity(id="a1", company_name="Acme", approved_at=T0, approved_by="admin@x")
        assert a.form_status == FormSubmissionStatus.IN_REVIEW
        assert a.approval is not None
        assert not a.approval.is_auto

    def test_completed_after_submission(self) -> None:
        a = AssessmentEntity(
            id="a1", company_name="Acme", approved_at=T0, approved_by=AUTO_APPROVER, submitted_at=T0
        )
        assert a.form_status == FormSubmissionStatus.COMPLETED
        assert a.approval.is_auto
