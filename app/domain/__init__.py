"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import (
    AssessmentEntity,
    DiscoveryQuestion,
    DocumentRequest,
    GenerationJobEntity,
    UploadedDocument,
)
from app.domain.enums import (
    ActorRole,
    AnswerFormat,
    FormSubmissionStatus,
    GenerationJobState,
)
from app.domain.exceptions import (
    AlreadyApprovedException,
    ApprovalNotAllowedException,
    AuthenticationException,
    AuthorizationException,
    FormLockedException,
    JobTransitionException,
    JourneyException,
    RequiredQuestionsUnansweredException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import UploadPolicy

__all__ = [
    # Entities
    "AssessmentEntity",
    "DiscoveryQuestion",
    "DocumentRequest",
    "GenerationJobEntity",
    "UploadedDocument",
    # Enums
    "ActorRole",
    "AnswerFormat",
    "FormSubmissionStatus",
    "GenerationJobState",
    # Exceptions
    "AlreadyApprovedException",
    "ApprovalNotAllowedException",
    "AuthenticationException",
    "AuthorizationException",
    "FormLockedException",
    "JobTransitionException",
    "JourneyException",
    "RequiredQuestionsUnansweredException",
    "ResourceNotFoundException",
    "ValidationException",
    # Value objects
    "UploadPolicy",
]
