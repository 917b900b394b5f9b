"""Service interfaces (ports) for the application layer.

Protocols define contracts for storage, notifications and the external
generation workflow (DIP).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import timedelta
from typing import TYPE_CHECKING, Any, BinaryIO, Protocol

if TYPE_CHECKING:
    from app.application.dtos.generation import DispatchRequest


class IStorageService(Protocol):
    """Protocol for object storage used by document slots."""

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Upload file with checksum verification."""

    def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream file content."""

    async def delete(self, storage_ref: str) -> bool:
        """Delete file. Returns True if deleted, False if not found."""

    async def generate_download_url(
        self,
        storage_ref: str,
        expiration: timedelta = timedelta(hours=1),
    ) -> str:
        """Return a temporary download URL."""


class INotificationService(Protocol):
    """Protocol for sending notifications (e.g. approval email to the customer)."""

    async def send(self, to_emails: list[str], subject: str, body: str) -> None:
        """Send a notification to the given recipients."""


class IGenerationDispatcher(Protocol):
    """Protocol for starting the external requirement-generation workflow."""

    async def dispatch(self, request: DispatchRequest) -> str | None:
        """Start the workflow; return its execution id when the engine reports one.

        Raises GenerationDispatchError when the workflow could not be started.
        """
