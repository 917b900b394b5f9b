"""Tests for form access rules (write permission, read-only, server guard)."""

from datetime import datetime, timezone

import pytest

from app.domain.access import compute_read_only, ensure_can_write, has_write_permission
from app.domain.entities.assessment import AssessmentEntity
from app.domain.enums import ActorRole, FormSubmissionStatus
from app.domain.exceptions import AuthorizationException, FormLockedException

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)
DRAFT = FormSubmissionStatus.DRAFT
IN_REVIEW = FormSubmissionStatus.IN_REVIEW
COMPLETED = FormSubmissionStatus.COMPLETED


@pytest.mark.parametrize("role", list(ActorRole))
def test_write_permission_requires_approval(role: ActorRole) -> None:
    assert has_write_permission(role, is_approved=True)
    assert not has_write_permission(role, is_approved=False)


@pytest.mark.parametrize(
    ("role", "approved", "status", "edit_mode", "expected"),
    [
        (ActorRole.CUSTOMER, False, DRAFT, False, True),
        (ActorRole.CUSTOMER, True, IN_REVIEW, False, False),
        (ActorRole.CUSTOMER, True, COMPLETED, False, True),
        (ActorRole.ADMIN, False, DRAFT, True, True),
        (ActorRole.ADMIN, True, IN_REVIEW, False, True),
        (ActorRole.ADMIN, True, IN_REVIEW, True, False),
        (ActorRole.ADMIN, True, COMPLETED, True, False),
    ],
)
def test_compute_read_only(
    role: ActorRole,
    approved: bool,
    status: FormSubmissionStatus,
    edit_mode: bool,
    expected: bool,
) -> None:
    assert compute_read_only(role, approved, status, edit_mode) is expected


def test_customer_edit_mode_is_ignored() -> None:
    assert compute_read_only(ActorRole.CUSTOMER, True, COMPLETED, edit_mode=True)


class TestEnsureCanWrite:
    def test_rejects_before_approval(self) -> None:
        a = AssessmentEntity(id="a1", company_name="Acme")
        with pytest.raises(AuthorizationException):
            ensure_can_write(ActorRole.ADMIN, a, "answer")

    def test_customer_locked_after_submission(self) -> None:
        a = AssessmentEntity(
            id="a1", company_name="Acme", approved_at=T0, approved_by="x", submitted_at=T0
        )
        with pytest.raises(FormLockedException):
            ensure_can_write(ActorRole.CUSTOMER, a, "answer")

    def test_admin_may_write_after_submission(self) -> None:
        a = AssessmentEntity(
            id="a1", company_name="Acme", approved_at=T0, approved_by="x", submitted_at=T0
        )
        ensure_can_write(ActorRole.ADMIN, a, "answer")
