"""Approval API: admin approves the generated requirements (write-once)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import get_approval_gate, require_admin
from app.application.dtos.actor import Actor
from app.application.use_cases import ApprovalGate
from app.core.limiter import limit_writes
from app.schemas.approval import ApprovalResponse

router = APIRouter()


@router.post("/{assessment_id}/approval", response_model=ApprovalResponse)
@limit_writes
async def approve_requirements(
    request: Request,
    assessment_id: str,
    actor: Annotated[Actor, Depends(require_admin)],
    gate: Annotated[ApprovalGate, Depends(get_approval_gate)],
):
    """Approve once the job completed; a second approval is rejected (409)."""
    record = await gate.approve(assessment_id, approver=actor.identity)
    return ApprovalResponse(
        approved_at=record.approved_at,
        approved_by=record.approved_by,
        is_auto=record.is_auto,
    )
