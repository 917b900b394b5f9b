"""Document use cases: slot upload, removal and listing."""

from app.application.use_cases.documents.document_slots import DocumentSlotService

__all__ = ["DocumentSlotService"]
