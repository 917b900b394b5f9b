"""Tests for domain exceptions: error codes, details and to_dict()."""

from app.domain.exceptions import (
    AlreadyApprovedException,
    ApprovalNotAllowedException,
    AuthorizationException,
    FormLockedException,
    GenerationDispatchError,
    JourneyException,
    RequiredQuestionsUnansweredException,
    ResourceNotFoundException,
    ValidationException,
)


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = JourneyException("something broke")
    assert exc.error_code == "JourneyException"
    assert exc.to_dict() == {
        "error": "JourneyException",
        "message": "something broke",
        "details": {},
    }


def test_validation_exception_carries_field() -> None:
    exc = ValidationException("too big", field="file")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "file"}


def test_authorization_exception_builds_message_from_resource_and_action() -> None:
    exc = AuthorizationException("answer", "save")
    assert exc.message == "Permission denied: save on answer"
    assert exc.details == {"resource": "answer", "action": "save"}


def test_authorization_exception_keeps_custom_message() -> None:
    exc = AuthorizationException("answer", "write", message="Not approved")
    assert exc.message == "Not approved"


def test_not_found_details() -> None:
    exc = ResourceNotFoundException("assessment", "a1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "assessment", "resource_id": "a1"}


def test_already_approved_keeps_first_approver() -> None:
    exc = AlreadyApprovedException("a1", "auto")
    assert exc.error_code == "ALREADY_APPROVED"
    assert exc.details["approved_by"] == "auto"


def test_approval_not_allowed_reports_job_state() -> None:
    exc = ApprovalNotAllowedException("a1", "running")
    assert exc.details["job_state"] == "running"


def test_required_unanswered_counts_missing() -> None:
    exc = RequiredQuestionsUnansweredException("a1", ["q1", "q2"])
    assert exc.message == "2 required question(s) not answered"
    assert exc.details["missing_question_ids"] == ["q1", "q2"]


def test_form_locked_and_dispatch_codes() -> None:
    assert FormLockedException("a1").error_code == "FORM_LOCKED"
    exc = GenerationDispatchError("timeout")
    assert exc.error_code == "GENERATION_DISPATCH_ERROR"
    assert "timeout" in exc.message
