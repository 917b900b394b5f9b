"""Questionnaire API: read the form, autosave answers, submit (customer)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_current_actor,
    get_questionnaire_service,
    get_questionnaire_service_for_write,
    require_customer,
)
from app.application.dtos.actor import Actor
from app.application.dtos.questionnaire import QuestionnaireView, SaveAnswerCommand
from app.application.use_cases import QuestionnaireService
from app.core.limiter import limit_writes
from app.schemas.approval import ApprovalResponse
from app.schemas.documents import DocumentRequestItem
from app.schemas.questionnaire import (
    AnswerItem,
    QuestionItem,
    QuestionnaireResponse,
    SaveAnswerRequest,
    SaveAnswerResponse,
    SubmissionResponse,
)

router = APIRouter()


def _to_response(view: QuestionnaireView) -> QuestionnaireResponse:
    questions = [
        QuestionItem(
            id=item.question.id,
            dimension_key=item.question.dimension_key,
            dimension_name=item.question.dimension_name,
            question_text=item.question.question_text,
            context=item.question.context,
            answer_format=item.question.answer_format,
            options=item.question.options,
            is_required=item.question.is_required,
            confidence_impact=item.question.confidence_impact,
            display_order=item.question.display_order,
            evidence_type=item.question.evidence_type,
            answer=AnswerItem.model_validate(item.answer) if item.answer else None,
        )
        for item in view.questions
    ]
    approval = (
        ApprovalResponse(
            approved_at=view.approval.approved_at,
            approved_by=view.approval.approved_by,
            is_auto=view.approval.is_auto,
        )
        if view.approval
        else None
    )
    return QuestionnaireResponse(
        assessment_id=view.assessment_id,
        company_name=view.company_name,
        job_state=view.job_state,
        form_status=view.form_status,
        approval=approval,
        submitted_at=view.submitted_at,
        questions=questions,
        document_requests=[
            DocumentRequestItem.model_validate(r) for r in view.document_requests
        ],
    )


@router.get("/{assessment_id}/questionnaire", response_model=QuestionnaireResponse)
async def get_questionnaire(
    assessment_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[QuestionnaireService, Depends(get_questionnaire_service)],
):
    """Questions (ordered by dimension, display order) with current answers."""
    view = await service.get_questionnaire(actor, assessment_id)
    return _to_response(view)


@router.put(
    "/{assessment_id}/answers/{question_id}",
    response_model=SaveAnswerResponse,
)
@limit_writes
async def save_answer(
    request: Request,
    assessment_id: str,
    question_id: str,
    body: SaveAnswerRequest,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[QuestionnaireService, Depends(get_questionnaire_service_for_write)],
):
    """Upsert the answer for one question (last write wins)."""
    result = await service.save_answer(
        actor,
        SaveAnswerCommand(
            assessment_id=assessment_id,
            question_id=question_id,
            answer_text=body.answer_text,
            answer_json=body.answer_json,
        ),
    )
    return SaveAnswerResponse(question_id=result.question_id, saved_at=result.saved_at)


@router.post("/{assessment_id}/submission", response_model=SubmissionResponse)
@limit_writes
async def submit_form(
    request: Request,
    assessment_id: str,
    actor: Annotated[Actor, Depends(require_customer)],
    service: Annotated[QuestionnaireService, Depends(get_questionnaire_service_for_write)],
):
    """Submit the form; one-way (form becomes read-only for the customer)."""
    submitted_at = await service.submit_form(actor, assessment_id)
    return SubmissionResponse(submitted_at=submitted_at)
