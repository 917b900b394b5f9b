"""Questionnaire domain entities: generated questions, answers and dimensions.

Questions arrive grouped by an open-ended dimension key; the set of
dimensions is discovered from the data, never fixed in code.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import AnswerFormat, ConfidenceImpact


@dataclass(frozen=True)
class DiscoveryQuestion:
    """A generated question. Never written by end users."""

    id: str
    assessment_id: str
    dimension_key: str
    question_text: str
    answer_format: AnswerFormat
    dimension_name: str | None = None
    context: str | None = None
    options: list[str] | None = None
    is_required: bool = False
    confidence_impact: ConfidenceImpact = ConfidenceImpact.MEDIUM
    display_order: int = 0
    evidence_type: str | None = None


@dataclass(frozen=True)
class Answer:
    """The single current answer for one question (upserted, last write wins)."""

    question_id: str
    assessment_id: str
    answer_text: str | None = None
    answer_json: Any = None
    answered_by: str | None = None
    updated_at: datetime | None = None


@dataclass
class Dimension:
    """Display group of questions sharing a dimension key."""

    key: str
    name: str
    questions: list[DiscoveryQuestion] = field(default_factory=list)


def is_answered(text: str | None, value: Any) -> bool:
    """An answer counts when it has non-empty text or a non-empty structured value.

    Empty strings and empty collections count as unanswered; they are stored
    as null.
    """
    return bool(text) or value not in (None, "", [], {})


def answer_is_present(answer: Answer | None) -> bool:
    if answer is None:
        return False
    return is_answered(answer.answer_text, answer.answer_json)


def group_dimensions(questions: Iterable[DiscoveryQuestion]) -> list[Dimension]:
    """Group questions by dimension key, ordered by first appearance.

    The first question seen for a key fixes both the group's position and its
    display name (dimension_name, falling back to the key).
    """
    groups: dict[str, Dimension] = {}
    for q in questions:
        dim = groups.get(q.dimension_key)
        if dim is None:
            dim = Dimension(key=q.dimension_key, name=q.dimension_name or q.dimension_key)
            groups[q.dimension_key] = dim
        dim.questions.append(q)
    return list(groups.values())


def unanswered_required(
    questions: Iterable[DiscoveryQuestion],
    answers: Mapping[str, Answer],
) -> list[str]:
    """Return ids of required questions without a present answer."""
    return [
        q.id
        for q in questions
        if q.is_required and not answer_is_present(answers.get(q.id))
    ]


def all_required_answered(
    questions: Iterable[DiscoveryQuestion],
    answers: Mapping[str, Answer],
) -> bool:
    """True when every required question is answered (vacuously true without any)."""
    return not unanswered_required(questions, answers)
