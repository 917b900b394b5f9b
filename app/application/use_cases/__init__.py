"""Application use cases: one entry point per workflow."""

from app.application.use_cases.approval import ApprovalGate
from app.application.use_cases.documents import DocumentSlotService
from app.application.use_cases.generation import GenerationJobSupervisor
from app.application.use_cases.journey import GetJourneyUseCase
from app.application.use_cases.questionnaire import QuestionnaireService

__all__ = [
    "ApprovalGate",
    "DocumentSlotService",
    "GenerationJobSupervisor",
    "GetJourneyUseCase",
    "QuestionnaireService",
]
