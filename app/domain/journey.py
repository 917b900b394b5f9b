"""Journey tracker: ordered stage statuses derived from the engagement state.

A pure function of its inputs; nothing here is persisted.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from app.domain.entities.assessment import ApprovalRecord
from app.domain.enums import FormSubmissionStatus, GenerationJobState, StageStatus

DOWNSTREAM_REPORT_COUNT = 5


@dataclass(frozen=True)
class JourneyInputs:
    """Snapshot of everything the journey depends on."""

    has_report: bool
    is_converted: bool
    job_state: GenerationJobState
    form_status: FormSubmissionStatus
    approval: ApprovalRecord | None = None
    prospect_created_at: datetime | None = None
    qualified_at: datetime | None = None
    report_delivered_at: datetime | None = None
    converted_at: datetime | None = None
    job_completed_at: datetime | None = None
    questions_count: int = 0
    submitted_at: datetime | None = None


@dataclass(frozen=True)
class JourneyStage:
    key: str
    title: str
    status: StageStatus
    subtitle: str | None = None
    timestamp: datetime | None = None
    needs_attention: bool = False


def _generation_status(state: GenerationJobState) -> StageStatus:
    if state == GenerationJobState.COMPLETED:
        return StageStatus.COMPLETED
    if state in (GenerationJobState.RUNNING, GenerationJobState.FAILED):
        return StageStatus.ACTIVE
    return StageStatus.UPCOMING


def _generation_subtitle(inputs: JourneyInputs) -> str:
    if inputs.job_state == GenerationJobState.RUNNING:
        return "Generating..."
    if inputs.job_state == GenerationJobState.FAILED:
        return "Failed"
    if inputs.job_state == GenerationJobState.COMPLETED and inputs.questions_count > 0:
        return f"{inputs.questions_count} questions"
    return "Discovery questions"


def _approval_status(inputs: JourneyInputs) -> StageStatus:
    if inputs.approval is not None:
        return StageStatus.COMPLETED
    if inputs.job_state == GenerationJobState.COMPLETED:
        return StageStatus.UPCOMING
    return StageStatus.LOCKED


def _approval_subtitle(approval: ApprovalRecord | None) -> str:
    if approval is None:
        return "Pending admin approval"
    if approval.is_auto:
        return "Auto-approved on generation"
    return "Manually approved by admin"


def _submission_status(inputs: JourneyInputs) -> StageStatus:
    if inputs.form_status == FormSubmissionStatus.COMPLETED:
        return StageStatus.COMPLETED
    if inputs.approval is not None:
        return StageStatus.UPCOMING
    return StageStatus.LOCKED


def _own_stages(inputs: JourneyInputs) -> list[JourneyStage]:
    """Each stage's status computed in isolation (before predecessor locking)."""
    stages = [
        JourneyStage(
            key="prospect",
            title="Prospect",
            status=StageStatus.COMPLETED,
            timestamp=inputs.prospect_created_at,
        ),
        JourneyStage(
            key="qualified",
            title="Qualified",
            subtitle="Signed up & verified",
            status=StageStatus.COMPLETED
            if inputs.qualified_at is not None or inputs.is_converted
            else StageStatus.UPCOMING,
            timestamp=inputs.qualified_at,
        ),
        JourneyStage(
            key="phase1_report",
            title="Phase 1 Report",
            subtitle="Readiness assessment",
            status=StageStatus.COMPLETED if inputs.has_report else StageStatus.UPCOMING,
            timestamp=inputs.report_delivered_at if inputs.has_report else None,
        ),
        JourneyStage(
            key="customer",
            title="Customer",
            subtitle="Converted to active customer",
            status=StageStatus.COMPLETED if inputs.is_converted else StageStatus.UPCOMING,
            timestamp=inputs.converted_at,
        ),
        JourneyStage(
            key="requirements_generated",
            title="Requirements Generated",
            subtitle=_generation_subtitle(inputs),
            status=_generation_status(inputs.job_state),
            timestamp=inputs.job_completed_at
            if inputs.job_state == GenerationJobState.COMPLETED
            else None,
            needs_attention=inputs.job_state == GenerationJobState.FAILED,
        ),
        JourneyStage(
            key="requirements_approved",
            title="Requirements Approved",
            subtitle=_approval_subtitle(inputs.approval),
            status=_approval_status(inputs),
            timestamp=inputs.approval.approved_at if inputs.approval else None,
        ),
        JourneyStage(
            key="requirements_submitted",
            title="Requirements Submitted",
            subtitle="Customer responses",
            status=_submission_status(inputs),
            timestamp=inputs.submitted_at,
        ),
    ]
    for n in range(1, DOWNSTREAM_REPORT_COUNT + 1):
        stages.append(
            JourneyStage(
                key=f"report_{n}",
                title=f"Report {n}",
                subtitle="Phase 2",
                status=StageStatus.LOCKED,
            )
        )
    return stages


def derive_journey(inputs: JourneyInputs) -> list[JourneyStage]:
    """Return the ordered journey stages.

    A stage that has not completed is locked while its predecessor is not
    completed. Completed stages record facts that already happened and keep
    their status (a customer converted without a Phase 1 report stays a
    customer).
    """
    result: list[JourneyStage] = []
    previous: JourneyStage | None = None
    for stage in _own_stages(inputs):
        if (
            previous is not None
            and previous.status != StageStatus.COMPLETED
            and stage.status != StageStatus.COMPLETED
        ):
            stage = replace(stage, status=StageStatus.LOCKED, needs_attention=False)
        result.append(stage)
        previous = stage
    return result
