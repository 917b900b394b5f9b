"""Upload value objects: the accepted-file policy and filename sanitizing.

Value objects are immutable types with self-validation. The same policy is
checked by the client before any network call and again by the server.
"""

import re
from dataclasses import dataclass, field

from app.domain.exceptions import ValidationException

MAX_FILE_SIZE = 25 * 1024 * 1024  # 25 MiB
MAX_FILENAME_LENGTH = 200

ACCEPTED_FILE_TYPES: dict[str, str] = {
    "application/pdf": "PDF",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "DOCX",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "XLSX",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "PPTX",
    "text/csv": "CSV",
    "image/png": "PNG",
    "image/jpeg": "JPEG",
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


@dataclass(frozen=True)
class UploadPolicy:
    """Size limit and accepted MIME types for slot uploads."""

    max_size: int = MAX_FILE_SIZE
    accepted_types: frozenset[str] = field(
        default_factory=lambda: frozenset(ACCEPTED_FILE_TYPES)
    )

    def __post_init__(self) -> None:
        if self.max_size <= 0:
            raise ValueError("max_size must be positive")
        if not self.accepted_types:
            raise ValueError("accepted_types must not be empty")

    def validate(self, file_name: str, size: int, content_type: str | None) -> None:
        """Raise ValidationException when the file may not be uploaded."""
        if size > self.max_size:
            limit_mb = self.max_size // (1024 * 1024)
            raise ValidationException(
                f"File exceeds {limit_mb}MB limit: {file_name}", field="file"
            )
        if not content_type or content_type not in self.accepted_types:
            labels = sorted(ACCEPTED_FILE_TYPES.get(t, t) for t in self.accepted_types)
            raise ValidationException(
                f"File type not accepted: {file_name}. Accepted: {', '.join(labels)}",
                field="file",
            )



def sanitize_filename(file_name: str) -> str:
    """Replace anything outside [a-zA-Z0-9._-] with '_' and cap the length."""
    name = file_name.replace("\\", "/").rsplit("/", 1)[-1]
    safe = _UNSAFE_FILENAME_CHARS.sub("_", name)[:MAX_FILENAME_LENGTH]
    if not safe.strip("._"):
        raise ValidationException("Filename is empty or invalid", field="file")
    return safe
