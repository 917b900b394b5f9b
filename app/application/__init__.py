"""Application layer: DTOs, interfaces (ports), use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, storage, dispatcher, notifications).
"""

from app.application.interfaces import (
    IAssessmentRepository,
    IDiscoveryAnswerRepository,
    IDiscoveryQuestionRepository,
    IDocumentRequestRepository,
    IDocumentUploadRepository,
    IGenerationDispatcher,
    IGenerationJobRepository,
    INotificationService,
    IStorageService,
)
from app.application.use_cases import (
    ApprovalGate,
    DocumentSlotService,
    GenerationJobSupervisor,
    GetJourneyUseCase,
    QuestionnaireService,
)

__all__ = [
    "ApprovalGate",
    "DocumentSlotService",
    "GenerationJobSupervisor",
    "GetJourneyUseCase",
    "IAssessmentRepository",
    "IDiscoveryAnswerRepository",
    "IDiscoveryQuestionRepository",
    "IDocumentRequestRepository",
    "IDocumentUploadRepository",
    "IGenerationDispatcher",
    "IGenerationJobRepository",
    "INotificationService",
    "IStorageService",
    "QuestionnaireService",
]
