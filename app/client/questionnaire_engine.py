"""Client-side questionnaire engine: per-question autosave with debouncing.

Free-text formats (text, number, percentage) save after a quiet period;
choice formats save immediately. Each question owns its own timer, so
editing one question never delays or cancels another's save.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.client.api_client import ApiError, parse_timestamp
from app.client.gateways import AnswerGateway
from app.domain.access import compute_read_only, has_write_permission
from app.domain.entities.questionnaire import (
    Answer,
    DiscoveryQuestion,
    Dimension,
    group_dimensions,
    is_answered,
)
from app.domain.enums import (
    ActorRole,
    AnswerFormat,
    ConfidenceImpact,
    FormSubmissionStatus,
    SaveStatus,
)
from app.domain.exceptions import (
    AuthorizationException,
    FormLockedException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 1.5
SCALE_RANGE = range(1, 6)


@dataclass
class FormAccess:
    """Who is looking at the form and whether they may edit it right now.

    edit_mode is the admin's privileged-edit toggle; it is ignored for the
    customer and before approval.
    """

    role: ActorRole
    is_approved: bool
    form_status: FormSubmissionStatus
    edit_mode: bool = False

    @property
    def can_write(self) -> bool:
        return has_write_permission(self.role, self.is_approved)

    @property
    def read_only(self) -> bool:
        return compute_read_only(self.role, self.is_approved, self.form_status, self.edit_mode)

    def set_edit_mode(self, enabled: bool) -> bool:
        """Toggle admin edit mode; returns False (no change) when not applicable."""
        if self.role != ActorRole.ADMIN or not self.is_approved:
            return False
        self.edit_mode = enabled
        return True


@dataclass
class QuestionState:
    """Local value and save status of one question."""

    question: DiscoveryQuestion
    text: str | None = None
    value: Any = None
    status: SaveStatus = SaveStatus.IDLE
    revision: int = 0

    @property
    def answered(self) -> bool:
        return is_answered(self.text, self.value)


class QuestionnaireEngine:
    """Holds the form state for one assessment and autosaves through a gateway."""

    def __init__(
        self,
        assessment_id: str,
        questions: Iterable[DiscoveryQuestion],
        gateway: AnswerGateway,
        access: FormAccess,
        answers: Mapping[str, Answer] | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self.assessment_id = assessment_id
        self.gateway = gateway
        self.access = access
        self.debounce_seconds = debounce_seconds
        self.last_saved_at: datetime | None = None
        self.questions: list[DiscoveryQuestion] = []
        self.dimensions: list[Dimension] = []
        self._states: dict[str, QuestionState] = {}
        self._timers: dict[str, asyncio.Task[None]] = {}
        self._saves: set[asyncio.Task[None]] = set()
        self.add_questions(questions, answers)

    def add_questions(
        self,
        questions: Iterable[DiscoveryQuestion],
        answers: Mapping[str, Answer] | None = None,
    ) -> None:
        """Add questions (with any stored answers); ids already present are skipped.

        New required questions count against submit_enabled immediately.
        """
        answers = answers or {}
        for q in questions:
            if q.id in self._states:
                continue
            state = QuestionState(question=q)
            answer = answers.get(q.id)
            if answer is not None:
                state.text = answer.answer_text
                state.value = answer.answer_json
                state.status = SaveStatus.SAVED
            self._states[q.id] = state
            self.questions.append(q)
        self.dimensions = group_dimensions(self.questions)

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        gateway: AnswerGateway,
        role: ActorRole,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> QuestionnaireEngine:
        """Build from the GET /questionnaire response body."""
        assessment_id = payload["assessment_id"]
        questions: list[DiscoveryQuestion] = []
        answers: dict[str, Answer] = {}
        for item in payload.get("questions", []):
            questions.append(
                DiscoveryQuestion(
                    id=item["id"],
                    assessment_id=assessment_id,
                    dimension_key=item["dimension_key"],
                    dimension_name=item.get("dimension_name"),
                    question_text=item["question_text"],
                    context=item.get("context"),
                    answer_format=AnswerFormat(item["answer_format"]),
                    options=item.get("options"),
                    is_required=bool(item.get("is_required")),
                    confidence_impact=ConfidenceImpact(item.get("confidence_impact", "medium")),
                    display_order=item.get("display_order", 0),
                    evidence_type=item.get("evidence_type"),
                )
            )
            answer = item.get("answer")
            if answer:
                answers[item["id"]] = Answer(
                    question_id=item["id"],
                    assessment_id=assessment_id,
                    answer_text=answer.get("answer_text"),
                    answer_json=answer.get("answer_json"),
                    answered_by=answer.get("answered_by"),
                    updated_at=parse_timestamp(answer.get("updated_at")),
                )
        access = FormAccess(
            role=role,
            is_approved=payload.get("approval") is not None,
            form_status=FormSubmissionStatus(payload["form_status"]),
        )
        return cls(assessment_id, questions, gateway, access, answers, debounce_seconds)

    # State accessors

    def _state(self, question_id: str) -> QuestionState:
        try:
            return self._states[question_id]
        except KeyError:
            raise ValidationException(f"Unknown question: {question_id}", field="question_id") from None

    def status(self, question_id: str) -> SaveStatus:
        return self._state(question_id).status

    def text(self, question_id: str) -> str | None:
        return self._state(question_id).text

    def value(self, question_id: str) -> Any:
        return self._state(question_id).value

    @property
    def read_only(self) -> bool:
        return self.access.read_only

    @property
    def answered_count(self) -> int:
        return sum(1 for s in self._states.values() if s.answered)

    @property
    def required_count(self) -> int:
        return sum(1 for s in self._states.values() if s.question.is_required)

    @property
    def required_answered_count(self) -> int:
        return sum(
            1 for s in self._states.values() if s.question.is_required and s.answered
        )

    @property
    def all_required_answered(self) -> bool:
        return self.required_answered_count == self.required_count

    @property
    def is_saving(self) -> bool:
        return any(s.status == SaveStatus.SAVING for s in self._states.values())

    @property
    def has_unsaved(self) -> bool:
        return any(s.status == SaveStatus.IDLE and s.revision for s in self._states.values())

    @property
    def submit_enabled(self) -> bool:
        return (
            self.access.role == ActorRole.CUSTOMER
            and not self.read_only
            and self.all_required_answered
        )

    # Editing

    def _ensure_writable(self) -> None:
        """Raise instead of silently dropping an edit the actor may not make."""
        if not self.read_only:
            return
        if (
            self.access.role == ActorRole.CUSTOMER
            and self.access.form_status == FormSubmissionStatus.COMPLETED
        ):
            raise FormLockedException(self.assessment_id)
        raise AuthorizationException("answer", "save", "Form is read-only for this actor")

    def _require_format(self, state: QuestionState, *formats: AnswerFormat) -> None:
        if state.question.answer_format not in formats:
            raise ValidationException(
                f"Question {state.question.id} is {state.question.answer_format.value}",
                field="answer_format",
            )

    def edit_text(self, question_id: str, text: str) -> None:
        """Record a keystroke-level edit and (re)arm this question's debounce timer."""
        state = self._state(question_id)
        if not state.question.answer_format.is_debounced:
            raise ValidationException(
                f"Question {question_id} does not take free text", field="answer_format"
            )
        self._ensure_writable()
        state.text = text
        state.status = SaveStatus.IDLE
        state.revision += 1
        pending = self._timers.pop(question_id, None)
        if pending is not None:
            pending.cancel()
        self._timers[question_id] = asyncio.create_task(
            self._debounced_save(question_id, text)
        )

    async def _debounced_save(self, question_id: str, text: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        # Once fired, a later edit arms a new timer instead of cancelling this save.
        task = asyncio.current_task()
        if self._timers.get(question_id) is task:
            del self._timers[question_id]
        if task is not None:
            self._saves.add(task)
            task.add_done_callback(self._saves.discard)
        await self._save(question_id, text, None)

    async def select(self, question_id: str, option: str) -> bool:
        """Yes/no or single-select: save the chosen option immediately."""
        state = self._state(question_id)
        self._require_format(state, AnswerFormat.YES_NO, AnswerFormat.SELECT_ONE)
        self._ensure_writable()
        state.text = option
        state.revision += 1
        return await self._save(question_id, option, None)

    async def set_scale(self, question_id: str, rating: int) -> bool:
        """Scale 1-5: saves the text form and {"value": n} immediately."""
        state = self._state(question_id)
        self._require_format(state, AnswerFormat.SCALE_1_5)
        if rating not in SCALE_RANGE:
            raise ValidationException("Scale rating must be between 1 and 5", field="rating")
        self._ensure_writable()
        state.text = str(rating)
        state.value = {"value": rating}
        state.revision += 1
        return await self._save(question_id, state.text, state.value)

    async def toggle_option(self, question_id: str, option: str) -> bool:
        """Multi-select: add or remove option and save the full list immediately."""
        state = self._state(question_id)
        self._require_format(state, AnswerFormat.SELECT_MANY)
        self._ensure_writable()
        current = list(state.value) if isinstance(state.value, list) else []
        if option in current:
            current.remove(option)
        else:
            current.append(option)
        # An empty selection is stored as null.
        state.value = current or None
        state.revision += 1
        return await self._save(question_id, None, state.value)

    async def _save(self, question_id: str, text: str | None, value: Any) -> bool:
        if self.read_only:
            return False
        state = self._states[question_id]
        revision = state.revision
        state.status = SaveStatus.SAVING
        try:
            saved_at = await self.gateway.save_answer(
                self.assessment_id, question_id, text, value
            )
        except ApiError as e:
            logger.warning(
                "Autosave failed: question=%s error=%s", question_id, e.message
            )
            if state.revision == revision:
                state.status = SaveStatus.ERROR
            return False
        self.last_saved_at = saved_at
        # A newer edit since this save started keeps its own status.
        if state.revision == revision:
            state.status = SaveStatus.SAVED
        return True

    async def flush(self) -> None:
        """Save every pending debounced edit now and wait for all saves."""
        pending = list(self._timers.items())
        self._timers.clear()
        for _, task in pending:
            task.cancel()
        await asyncio.gather(*(task for _, task in pending), return_exceptions=True)
        await asyncio.gather(
            *(
                self._save(question_id, self._states[question_id].text, None)
                for question_id, task in pending
                if task.cancelled()
            )
        )
        await asyncio.gather(*list(self._saves), return_exceptions=True)

    async def close(self) -> None:
        """Drop pending timers without saving."""
        pending = list(self._timers.values())
        self._timers.clear()
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    async def submit(self) -> datetime:
        """Flush pending edits then submit; the form becomes read-only for the customer."""
        await self.flush()
        if self.access.role != ActorRole.CUSTOMER:
            raise ValidationException("Only the customer submits the form", field="role")
        if self.read_only:
            raise FormLockedException(self.assessment_id)
        if not self.all_required_answered:
            raise ValidationException(
                f"{self.required_count - self.required_answered_count} required "
                "question(s) not answered",
                field="questions",
            )
        submitted_at = await self.gateway.submit(self.assessment_id)
        self.access.form_status = FormSubmissionStatus.COMPLETED
        return submitted_at
