"""Ports the client-side engines talk to. JourneyApiClient implements all of them."""

from __future__ import annotations

from datetime import datetime
from typing import Any, BinaryIO, Protocol


class GenerationGateway(Protocol):
    async def get_generation(self, assessment_id: str) -> dict[str, Any]:
        """Return the job view (state, started_at, error_message, ...)."""

    async def trigger_generation(self, assessment_id: str, force: bool = False) -> dict[str, Any]:
        """Trigger or retry; returns {triggered, job}."""


class AnswerGateway(Protocol):
    async def save_answer(
        self,
        assessment_id: str,
        question_id: str,
        answer_text: str | None,
        answer_json: Any,
    ) -> datetime:
        """Upsert one answer and return the server's saved_at."""

    async def submit(self, assessment_id: str) -> datetime:
        """Submit the form and return submitted_at."""


class DocumentGateway(Protocol):
    async def upload_document(
        self,
        assessment_id: str,
        slot_key: str,
        file_name: str,
        content: bytes | BinaryIO,
        content_type: str,
    ) -> dict[str, Any]:
        """Upload one file into a slot; returns the stored document."""

    async def delete_document(self, document_id: str) -> None:
        """Remove one upload."""

    async def list_documents(self, assessment_id: str) -> dict[str, list[dict[str, Any]]]:
        """Uploads grouped by slot key."""
