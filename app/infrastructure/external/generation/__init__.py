"""External requirement-generation workflow adapters."""

from app.infrastructure.external.generation.webhook_dispatcher import (
    WebhookGenerationDispatcher,
)

__all__ = ["WebhookGenerationDispatcher"]
