"""Tests for the log-only notification sender."""

import logging

from app.infrastructure.services.notification_service import LogOnlyNotificationService


async def test_send_masks_recipients(caplog) -> None:
    caplog.set_level(logging.INFO, logger="app.infrastructure.services.notification_service")
    await LogOnlyNotificationService().send(
        ["owner@acme.test"], "Your requirements form is ready", "Hello"
    )
    assert "o***@acme.test" in caplog.text
    assert "owner@acme.test" not in caplog.text


async def test_send_without_recipient_warns(caplog) -> None:
    caplog.set_level(logging.INFO, logger="app.infrastructure.services.notification_service")
    await LogOnlyNotificationService().send(["", None], "Ready", "Hello")
    assert any(r.levelno == logging.WARNING for r in caplog.records)
