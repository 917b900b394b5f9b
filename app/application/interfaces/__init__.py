"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IAssessmentRepository,
    IDiscoveryAnswerRepository,
    IDiscoveryQuestionRepository,
    IDocumentRequestRepository,
    IDocumentUploadRepository,
    IGenerationJobRepository,
)
from app.application.interfaces.services import (
    IGenerationDispatcher,
    INotificationService,
    IStorageService,
)

__all__ = [
    "IAssessmentRepository",
    "IDiscoveryAnswerRepository",
    "IDiscoveryQuestionRepository",
    "IDocumentRequestRepository",
    "IDocumentUploadRepository",
    "IGenerationDispatcher",
    "IGenerationJobRepository",
    "INotificationService",
    "IStorageService",
]
