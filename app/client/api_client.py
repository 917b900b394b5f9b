"""Async HTTP client for the journey API (used by the client-side engines).

Every non-2xx response and every transport failure surfaces as ApiError so
callers handle exactly one exception type.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, BinaryIO

import httpx

from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

API_PREFIX = "/api/v1"
NETWORK_ERROR = "NETWORK_ERROR"


class ApiError(Exception):
    """Failed API call: status_code is 0 when the server was not reached."""

    def __init__(self, status_code: int, error_code: str, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.message = message

    def __repr__(self) -> str:
        return f"ApiError({self.status_code}, {self.error_code!r}, {self.message!r})"


def _error_from_response(response: httpx.Response) -> ApiError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    return ApiError(
        response.status_code,
        str(body.get("error") or "HTTP_ERROR"),
        str(body.get("message") or response.reason_phrase or "Request failed"),
    )


def parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class JourneyApiClient:
    """Thin wrapper over httpx.AsyncClient with Bearer auth.

    Pass http_client to share a connection pool (or an ASGI transport in tests).
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._base = base_url.rstrip("/") + API_PREFIX
        self._headers = {"Authorization": f"Bearer {token}"}

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> JourneyApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(
                method, f"{self._base}{path}", headers=self._headers, **kwargs
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(0, NETWORK_ERROR, str(e) or type(e).__name__) from e
        if response.is_error:
            raise _error_from_response(response)
        return response

    # Generation

    async def trigger_generation(self, assessment_id: str, force: bool = False) -> dict[str, Any]:
        response = await self._request(
            "POST", f"/assessments/{assessment_id}/generation", json={"force": force}
        )
        return response.json()

    async def get_generation(self, assessment_id: str) -> dict[str, Any]:
        response = await self._request("GET", f"/assessments/{assessment_id}/generation")
        return response.json()

    # Questionnaire

    async def get_questionnaire(self, assessment_id: str) -> dict[str, Any]:
        response = await self._request("GET", f"/assessments/{assessment_id}/questionnaire")
        return response.json()

    async def save_answer(
        self,
        assessment_id: str,
        question_id: str,
        answer_text: str | None,
        answer_json: Any,
    ) -> datetime:
        """Upsert one answer; returns the server's saved_at."""
        response = await self._request(
            "PUT",
            f"/assessments/{assessment_id}/answers/{question_id}",
            json={"answer_text": answer_text, "answer_json": answer_json},
        )
        return datetime.fromisoformat(response.json()["saved_at"])

    async def approve(self, assessment_id: str) -> dict[str, Any]:
        response = await self._request("POST", f"/assessments/{assessment_id}/approval")
        return response.json()

    async def submit(self, assessment_id: str) -> datetime:
        response = await self._request("POST", f"/assessments/{assessment_id}/submission")
        return datetime.fromisoformat(response.json()["submitted_at"])

    # Documents

    async def upload_document(
        self,
        assessment_id: str,
        slot_key: str,
        file_name: str,
        content: bytes | BinaryIO,
        content_type: str,
    ) -> dict[str, Any]:
        response = await self._request(
            "POST",
            f"/assessments/{assessment_id}/documents",
            data={"slot_key": slot_key},
            files={"file": (file_name, content, content_type)},
        )
        return response.json()

    async def delete_document(self, document_id: str) -> None:
        await self._request("DELETE", f"/documents/{document_id}")

    async def list_documents(self, assessment_id: str) -> dict[str, list[dict[str, Any]]]:
        response = await self._request("GET", f"/assessments/{assessment_id}/documents")
        return response.json()["documents"]

    # Journey

    async def get_journey(self, assessment_id: str) -> list[dict[str, Any]]:
        response = await self._request("GET", f"/assessments/{assessment_id}/journey")
        return response.json()["stages"]
