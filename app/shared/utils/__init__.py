"""Shared utilities: datetime and generators."""

from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid, generate_token

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "generate_token",
    "utc_now",
]
