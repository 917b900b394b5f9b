"""Infrastructure service implementations."""

from app.infrastructure.services.notification_service import LogOnlyNotificationService

__all__ = ["LogOnlyNotificationService"]
