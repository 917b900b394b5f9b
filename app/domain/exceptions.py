"""Domain exceptions for the customer journey engine.

Defines domain-level exceptions that represent business rule violations
(illegal job transitions, approval latch, locked forms). These exceptions
are independent of infrastructure concerns. The presentation layer maps
them to HTTP responses in app.core.exception_handlers via error_code.
"""

from typing import Any


class JourneyException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(JourneyException):
    """Raised when input validation fails (e.g. file too large, unknown format)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(JourneyException):
    """Raised when the bearer token is missing, invalid or expired."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(JourneyException):
    """Raised when the actor may not perform the operation in the current phase."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'answer', 'document').
            action: Optional action that was attempted (e.g. 'save', 'remove').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action and message == "Permission denied":
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(JourneyException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'assessment', 'question').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class JobTransitionException(JourneyException):
    """Raised when a generation job transition is not allowed from its current state."""

    def __init__(self, assessment_id: str, current_state: str, attempted: str) -> None:
        super().__init__(
            f"Cannot {attempted} generation job in state '{current_state}'",
            "JOB_TRANSITION_ERROR",
            {
                "assessment_id": assessment_id,
                "current_state": current_state,
                "attempted": attempted,
            },
        )


class AlreadyApprovedException(JourneyException):
    """Raised on a second approval; the first approval record is never overwritten."""

    def __init__(self, assessment_id: str, approved_by: str | None) -> None:
        super().__init__(
            "Requirements already approved",
            "ALREADY_APPROVED",
            {"assessment_id": assessment_id, "approved_by": approved_by},
        )


class ApprovalNotAllowedException(JourneyException):
    """Raised when approving before generation completed."""

    def __init__(self, assessment_id: str, job_state: str) -> None:
        super().__init__(
            "Requirements can only be approved after generation completed",
            "APPROVAL_NOT_ALLOWED",
            {"assessment_id": assessment_id, "job_state": job_state},
        )


class FormLockedException(JourneyException):
    """Raised when writing to or submitting a form that was already submitted."""

    def __init__(self, assessment_id: str) -> None:
        super().__init__(
            "Form already submitted",
            "FORM_LOCKED",
            {"assessment_id": assessment_id},
        )


class RequiredQuestionsUnansweredException(JourneyException):
    """Raised when submitting with required questions still unanswered."""

    def __init__(self, assessment_id: str, missing_question_ids: list[str]) -> None:
        count = len(missing_question_ids)
        super().__init__(
            f"{count} required question(s) not answered",
            "REQUIRED_QUESTIONS_UNANSWERED",
            {
                "assessment_id": assessment_id,
                "missing_count": count,
                "missing_question_ids": missing_question_ids,
            },
        )


class SqlNotConfiguredException(JourneyException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class GenerationDispatchError(JourneyException):
    """Raised when the external generation workflow could not be started."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Failed to trigger requirement generation: {reason}",
            "GENERATION_DISPATCH_ERROR",
            {"reason": reason},
        )
