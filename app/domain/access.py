"""Form access rules shared by the questionnaire and the document slots.

Write permission is granted by approval; the submitted status locks the
customer; admins additionally need edit mode turned on (a client toggle
the server does not store).
"""

from app.domain.entities.assessment import AssessmentEntity
from app.domain.enums import ActorRole, FormSubmissionStatus
from app.domain.exceptions import AuthorizationException, FormLockedException


def has_write_permission(role: ActorRole, is_approved: bool) -> bool:
    """Both roles may write only once requirements are approved."""
    return is_approved


def compute_read_only(
    role: ActorRole,
    is_approved: bool,
    form_status: FormSubmissionStatus,
    edit_mode: bool = False,
) -> bool:
    """Return whether the form is read-only for this actor.

    Read-only if the actor lacks write permission, or a customer looks at a
    completed form, or an admin has not enabled edit mode (or the form is
    not approved yet).
    """
    if not has_write_permission(role, is_approved):
        return True
    if role == ActorRole.CUSTOMER:
        return form_status == FormSubmissionStatus.COMPLETED
    return not (is_approved and edit_mode)


def ensure_can_write(role: ActorRole, assessment: AssessmentEntity, resource: str) -> None:
    """Server-side write guard (edit mode is a client concern and not checked here).

    Raises AuthorizationException before approval and FormLockedException
    when a customer writes to a submitted form.
    """
    if not has_write_permission(role, assessment.is_approved):
        raise AuthorizationException(
            resource,
            "write",
            message="Requirements have not been approved yet",
        )
    if role == ActorRole.CUSTOMER and assessment.form_status == FormSubmissionStatus.COMPLETED:
        raise FormLockedException(assessment.id)
