"""Domain value objects and shared value types."""

from app.domain.value_objects.upload import (
    ACCEPTED_FILE_TYPES,
    MAX_FILE_SIZE,
    UploadPolicy,
    sanitize_filename,
)

__all__ = [
    "ACCEPTED_FILE_TYPES",
    "MAX_FILE_SIZE",
    "UploadPolicy",
    "sanitize_filename",
]
