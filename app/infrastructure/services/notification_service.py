"""Customer notifications (approval emails) written to the log.

No mail transport ships with the service; deployments that need real email
provide another INotificationService.
"""

from __future__ import annotations

from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _mask(email: str) -> str:
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}" if domain else "***"


class LogOnlyNotificationService:
    """Logs each notification instead of delivering it.

    Addresses are masked at INFO; the body is only logged at DEBUG.
    """

    async def send(self, to_emails: list[str], subject: str, body: str) -> None:
        recipients = [e for e in to_emails if e]
        if not recipients:
            logger.warning("Notification dropped, no recipient: %r", subject)
            return
        logger.info(
            "Notification %r to %s",
            subject,
            ", ".join(_mask(e) for e in recipients),
        )
        logger.debug("Notification body: %s", body)
