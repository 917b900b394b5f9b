"""Tests for the client-side QuestionnaireEngine (debounced and instant autosave)."""

import asyncio
from datetime import datetime, timezone
from typing import Any

import pytest

from app.client.api_client import ApiError
from app.client.questionnaire_engine import FormAccess, QuestionnaireEngine
from app.domain.entities.questionnaire import Answer
from app.domain.enums import ActorRole, AnswerFormat, FormSubmissionStatus, SaveStatus
from app.domain.exceptions import (
    AuthorizationException,
    FormLockedException,
    ValidationException,
)

DEBOUNCE = 0.1
SAVED_AT = datetime(2025, 3, 1, 12, 0, 5, tzinfo=timezone.utc)


class RecordingAnswerGateway:
    def __init__(self) -> None:
        self.saves: list[tuple[str, str | None, Any]] = []
        self.failing: set[str] = set()
        self.submitted: list[str] = []

    async def save_answer(self, assessment_id, question_id, answer_text, answer_json) -> datetime:
        self.saves.append((question_id, answer_text, answer_json))
        if question_id in self.failing:
            raise ApiError(0, "NETWORK_ERROR", "connection reset")
        return SAVED_AT

    async def submit(self, assessment_id: str) -> datetime:
        self.submitted.append(assessment_id)
        return SAVED_AT


@pytest.fixture
def gateway() -> RecordingAnswerGateway:
    return RecordingAnswerGateway()


@pytest.fixture
def questions(question_factory):
    return [
        question_factory("team", is_required=True),
        question_factory("budget", answer_format=AnswerFormat.NUMBER),
        question_factory("cloud", answer_format=AnswerFormat.YES_NO, is_required=True),
        question_factory("maturity", answer_format=AnswerFormat.SCALE_1_5),
        question_factory(
            "systems", answer_format=AnswerFormat.SELECT_MANY, options=["ERP", "CRM", "BI"]
        ),
    ]


def _access(role: ActorRole = ActorRole.CUSTOMER, approved: bool = True, **kwargs) -> FormAccess:
    status = kwargs.pop("form_status", FormSubmissionStatus.IN_REVIEW)
    return FormAccess(role=role, is_approved=approved, form_status=status, **kwargs)


@pytest.fixture
async def engine(questions, gateway) -> QuestionnaireEngine:
    engine = QuestionnaireEngine(
        "asm-1", questions, gateway, _access(), debounce_seconds=DEBOUNCE
    )
    yield engine
    await engine.close()


async def test_text_edit_saves_after_quiet_period(engine, gateway) -> None:
    engine.edit_text("team", "12")
    assert engine.status("team") == SaveStatus.IDLE
    assert engine.has_unsaved
    await asyncio.sleep(DEBOUNCE * 3)
    assert gateway.saves == [("team", "12", None)]
    assert engine.status("team") == SaveStatus.SAVED
    assert engine.last_saved_at == SAVED_AT
    assert not engine.has_unsaved


async def test_edits_within_window_reset_timer(engine, gateway) -> None:
    """Only the final text is saved when edits keep coming inside the window."""
    engine.edit_text("team", "1")
    await asyncio.sleep(DEBOUNCE * 0.6)
    engine.edit_text("team", "12")
    await asyncio.sleep(DEBOUNCE * 0.6)
    assert gateway.saves == []
    await asyncio.sleep(DEBOUNCE * 2)
    assert gateway.saves == [("team", "12", None)]


async def test_questions_debounce_independently(engine, gateway) -> None:
    """Editing one question never cancels another question's pending save."""
    engine.edit_text("team", "12")
    engine.edit_text("budget", "50000")
    await asyncio.sleep(DEBOUNCE * 3)
    assert sorted(gateway.saves) == [("budget", "50000", None), ("team", "12", None)]


async def test_failed_save_keeps_value(engine, gateway) -> None:
    gateway.failing.add("team")
    engine.edit_text("team", "12")
    await asyncio.sleep(DEBOUNCE * 3)
    assert engine.status("team") == SaveStatus.ERROR
    assert engine.text("team") == "12"
    assert engine.last_saved_at is None


async def test_flush_saves_pending_edits_now(engine, gateway) -> None:
    engine.edit_text("team", "12")
    await engine.flush()
    assert gateway.saves == [("team", "12", None)]
    await asyncio.sleep(DEBOUNCE * 2)
    assert len(gateway.saves) == 1


async def test_close_drops_pending_edits(engine, gateway) -> None:
    engine.edit_text("team", "12")
    await engine.close()
    await asyncio.sleep(DEBOUNCE * 2)
    assert gateway.saves == []


async def test_choice_saves_immediately(engine, gateway) -> None:
    assert await engine.select("cloud", "yes") is True
    assert gateway.saves == [("cloud", "yes", None)]
    assert engine.status("cloud") == SaveStatus.SAVED


async def test_scale_saves_text_and_value(engine, gateway) -> None:
    await engine.set_scale("maturity", 4)
    assert gateway.saves == [("maturity", "4", {"value": 4})]
    assert engine.value("maturity") == {"value": 4}
    with pytest.raises(ValidationException):
        await engine.set_scale("maturity", 6)


async def test_multi_select_toggles_list(engine, gateway) -> None:
    await engine.toggle_option("systems", "ERP")
    await engine.toggle_option("systems", "CRM")
    await engine.toggle_option("systems", "ERP")
    assert engine.value("systems") == ["CRM"]
    assert gateway.saves[-1] == ("systems", None, ["CRM"])


async def test_wrong_format_rejected(engine) -> None:
    with pytest.raises(ValidationException):
        engine.edit_text("cloud", "yes")
    with pytest.raises(ValidationException):
        await engine.select("team", "yes")


async def test_read_only_edits_raise(questions, gateway) -> None:
    engine = QuestionnaireEngine(
        "asm-1", questions, gateway, _access(approved=False), debounce_seconds=DEBOUNCE
    )
    assert engine.read_only
    with pytest.raises(AuthorizationException):
        engine.edit_text("team", "12")
    with pytest.raises(AuthorizationException):
        await engine.select("cloud", "yes")
    await asyncio.sleep(DEBOUNCE * 2)
    assert gateway.saves == []
    assert engine.text("team") is None


async def test_customer_edit_after_submission_is_locked(questions, gateway) -> None:
    access = _access(form_status=FormSubmissionStatus.COMPLETED)
    engine = QuestionnaireEngine("asm-1", questions, gateway, access, debounce_seconds=DEBOUNCE)
    with pytest.raises(FormLockedException):
        engine.edit_text("team", "12")
    with pytest.raises(FormLockedException):
        await engine.toggle_option("systems", "ERP")
    assert gateway.saves == []


async def test_admin_needs_edit_mode(questions, gateway) -> None:
    access = _access(role=ActorRole.ADMIN)
    engine = QuestionnaireEngine("asm-1", questions, gateway, access, debounce_seconds=DEBOUNCE)
    assert engine.read_only
    assert access.set_edit_mode(True) is True
    assert not engine.read_only
    assert await engine.select("cloud", "no") is True


def test_edit_mode_not_available_to_customer_or_before_approval() -> None:
    assert _access(role=ActorRole.CUSTOMER).set_edit_mode(True) is False
    assert _access(role=ActorRole.ADMIN, approved=False).set_edit_mode(True) is False


async def test_progress_counts_and_submit_enabled(engine) -> None:
    assert engine.required_count == 2
    assert not engine.submit_enabled
    engine.edit_text("team", "12")
    await engine.select("cloud", "yes")
    assert engine.required_answered_count == 2
    assert engine.answered_count == 2
    assert engine.submit_enabled


async def test_new_required_question_disables_submit_until_answered(
    engine, question_factory
) -> None:
    engine.edit_text("team", "12")
    await engine.select("cloud", "yes")
    assert engine.submit_enabled

    engine.add_questions([question_factory("region", is_required=True)])
    assert engine.required_count == 3
    assert not engine.submit_enabled

    engine.edit_text("region", "EMEA")
    assert engine.submit_enabled


async def test_clearing_required_multi_select_disables_submit(
    questions, gateway, question_factory
) -> None:
    """Toggling the only option off leaves the question unanswered, as the server stores it."""
    stack = question_factory(
        "stack", answer_format=AnswerFormat.SELECT_MANY, options=["ERP", "CRM"], is_required=True
    )
    engine = QuestionnaireEngine(
        "asm-1", [*questions, stack], gateway, _access(), debounce_seconds=DEBOUNCE
    )
    engine.edit_text("team", "12")
    await engine.select("cloud", "yes")
    await engine.toggle_option("stack", "ERP")
    assert engine.submit_enabled

    assert await engine.toggle_option("stack", "ERP") is True
    assert engine.value("stack") is None
    assert gateway.saves[-1] == ("stack", None, None)
    assert engine.required_answered_count == 2
    assert engine.submit_enabled is False
    await engine.close()


async def test_submit_flushes_then_locks(engine, gateway) -> None:
    engine.edit_text("team", "12")
    await engine.select("cloud", "yes")
    assert await engine.submit() == SAVED_AT
    assert ("team", "12", None) in gateway.saves
    assert gateway.submitted == ["asm-1"]
    assert engine.read_only
    with pytest.raises(FormLockedException):
        await engine.submit()


async def test_submit_with_missing_required_rejected(engine, gateway) -> None:
    with pytest.raises(ValidationException):
        await engine.submit()
    assert gateway.submitted == []


def test_existing_answers_loaded(questions, gateway) -> None:
    answers = {"team": Answer(question_id="team", assessment_id="asm-1", answer_text="8")}
    engine = QuestionnaireEngine("asm-1", questions, gateway, _access(), answers)
    assert engine.text("team") == "8"
    assert engine.status("team") == SaveStatus.SAVED
    assert engine.status("cloud") == SaveStatus.IDLE


def test_from_payload(gateway) -> None:
    payload = {
        "assessment_id": "asm-1",
        "form_status": "in_review",
        "approval": {"approved_at": "2025-03-01T10:00:00+00:00", "approved_by": "auto"},
        "questions": [
            {
                "id": "q1",
                "dimension_key": "people",
                "dimension_name": "People",
                "question_text": "Team size?",
                "answer_format": "number",
                "is_required": True,
                "confidence_impact": "high",
                "answer": {
                    "answer_text": "12",
                    "answer_json": None,
                    "updated_at": "2025-03-01T11:00:00+00:00",
                },
            },
            {
                "id": "q2",
                "dimension_key": "tech",
                "question_text": "Cloud?",
                "answer_format": "yes_no",
            },
        ],
    }
    engine = QuestionnaireEngine.from_payload(payload, gateway, ActorRole.CUSTOMER)
    assert [d.name for d in engine.dimensions] == ["People", "tech"]
    assert engine.text("q1") == "12"
    assert not engine.read_only
    assert engine.required_answered_count == 1
