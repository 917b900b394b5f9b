"""Assessment domain entity: one customer engagement and its phase markers."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import FormSubmissionStatus

AUTO_APPROVER = "auto"


@dataclass(frozen=True)
class ApprovalRecord:
    """Who approved the generated requirements and when. Written once."""

    approved_at: datetime
    approved_by: str

    @property
    def is_auto(self) -> bool:
        return self.approved_by == AUTO_APPROVER


@dataclass
class AssessmentEntity:
    """Domain entity for an assessment (prospect through requirements submission)."""

    id: str
    company_name: str
    contact_email: str | None = None
    prospect_created_at: datetime | None = None
    qualified_at: datetime | None = None
    has_report: bool = False
    report_delivered_at: datetime | None = None
    converted_at: datetime | None = None
    auto_approve_requirements: bool = False
    approved_at: datetime | None = None
    approved_by: str | None = None
    submitted_at: datetime | None = None

    @property
    def is_converted(self) -> bool:
        return self.converted_at is not None

    @property
    def is_approved(self) -> bool:
        return self.approved_at is not None

    @property
    def approval(self) -> ApprovalRecord | None:
        if self.approved_at is None:
            return None
        return ApprovalRecord(approved_at=self.approved_at, approved_by=self.approved_by or "")

    @property
    def form_status(self) -> FormSubmissionStatus:
        """Derived form status: completed once submitted, in_review once approved."""
        if self.submitted_at is not None:
            return FormSubmissionStatus.COMPLETED
        if self.is_approved:
            return FormSubmissionStatus.IN_REVIEW
        return FormSubmissionStatus.DRAFT
