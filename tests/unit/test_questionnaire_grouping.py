"""Tests for dimension grouping and required-answer checks."""

from app.domain.entities.questionnaire import (
    Answer,
    DiscoveryQuestion,
    all_required_answered,
    group_dimensions,
    is_answered,
    unanswered_required,
)
from app.domain.enums import AnswerFormat


def _q(qid: str, dim: str, name: str | None = None, required: bool = False) -> DiscoveryQuestion:
    return DiscoveryQuestion(
        id=qid,
        assessment_id="a1",
        dimension_key=dim,
        dimension_name=name,
        question_text=f"{qid}?",
        answer_format=AnswerFormat.TEXT,
        is_required=required,
    )


def test_groups_in_first_appearance_order() -> None:
    dims = group_dimensions(
        [_q("1", "security", "Security"), _q("2", "data"), _q("3", "security", "Ignored")]
    )
    assert [d.key for d in dims] == ["security", "data"]
    assert [q.id for q in dims[0].questions] == ["1", "3"]


def test_dimension_name_falls_back_to_key() -> None:
    dims = group_dimensions([_q("1", "custom_dimension")])
    assert dims[0].name == "custom_dimension"


def test_first_question_fixes_display_name() -> None:
    dims = group_dimensions([_q("1", "data", "Data"), _q("2", "data", "Data & AI")])
    assert dims[0].name == "Data"


def test_empty_input() -> None:
    assert group_dimensions([]) == []


def test_is_answered() -> None:
    assert is_answered("yes", None)
    assert is_answered(None, ["a"])
    assert is_answered(None, {"value": 3})
    assert not is_answered("", None)
    assert not is_answered(None, None)
    assert not is_answered(None, [])
    assert not is_answered(None, {})


def test_unanswered_required() -> None:
    questions = [_q("1", "d", required=True), _q("2", "d", required=True), _q("3", "d")]
    answers = {
        "1": Answer(question_id="1", assessment_id="a1", answer_text="done"),
        "2": Answer(question_id="2", assessment_id="a1", answer_text=""),
    }
    assert unanswered_required(questions, answers) == ["2"]
    assert not all_required_answered(questions, answers)


def test_all_required_answered_without_required_questions() -> None:
    assert all_required_answered([_q("1", "d")], {})
