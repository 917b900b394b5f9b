"""Client-side engines for the journey API: job monitor, questionnaire autosave, document slots."""

from app.client.api_client import ApiError, JourneyApiClient
from app.client.document_slots import DocumentSlotManager, FileResult, LocalFile
from app.client.job_monitor import GenerationJobMonitor
from app.client.questionnaire_engine import FormAccess, QuestionnaireEngine, QuestionState

__all__ = [
    "ApiError",
    "DocumentSlotManager",
    "FileResult",
    "FormAccess",
    "GenerationJobMonitor",
    "JourneyApiClient",
    "LocalFile",
    "QuestionState",
    "QuestionnaireEngine",
]
