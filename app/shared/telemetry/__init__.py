"""Shared telemetry: logging setup and request-scoped log context."""

from app.shared.telemetry.logging import (
    RequestIdFilter,
    get_logger,
    reset_request_id,
    set_request_id,
    setup_logging,
)

__all__ = [
    "RequestIdFilter",
    "get_logger",
    "reset_request_id",
    "set_request_id",
    "setup_logging",
]
