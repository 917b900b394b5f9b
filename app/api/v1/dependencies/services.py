"""Shared infrastructure services (composition root).

Storage is a process-wide singleton so download tokens survive across requests.
"""

from __future__ import annotations

from functools import lru_cache

import httpx
from fastapi import Request

from app.core.config import get_settings
from app.infrastructure.external.generation import WebhookGenerationDispatcher
from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.local_storage import LocalStorageService
from app.infrastructure.services import LogOnlyNotificationService


@lru_cache
def get_storage_service() -> LocalStorageService:
    """Storage backend from settings (created once per process)."""
    return StorageFactory.create_storage_service()


def get_notification_service() -> LogOnlyNotificationService:
    return LogOnlyNotificationService()


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound HTTP client created in the app lifespan."""
    return request.app.state.http_client


def build_generation_dispatcher(http_client: httpx.AsyncClient) -> WebhookGenerationDispatcher:
    return WebhookGenerationDispatcher(http_client, get_settings().generation_webhook_url)
