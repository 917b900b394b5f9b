"""Storage exceptions raised by the document storage backend.

They extend JourneyException so the central handlers map them like domain
errors. Every error carries the storage reference it concerns.
"""

from app.domain.exceptions import JourneyException


class StorageException(JourneyException):
    """Base exception for document storage operations."""

    def __init__(self, message: str, error_code: str, storage_ref: str, **details: str) -> None:
        super().__init__(message, error_code, {"storage_ref": storage_ref, **details})
        self.storage_ref = storage_ref


class StorageNotFoundError(StorageException):
    """No stored document under this reference (or the download token is unknown)."""

    def __init__(self, storage_ref: str) -> None:
        super().__init__("Stored document not found", "STORAGE_NOT_FOUND", storage_ref)


class StorageUploadError(StorageException):
    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Could not store document: {reason}", "STORAGE_UPLOAD_ERROR", storage_ref, reason=reason
        )


class StorageDownloadError(StorageException):
    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Could not read stored document: {reason}",
            "STORAGE_DOWNLOAD_ERROR",
            storage_ref,
            reason=reason,
        )


class StorageDeleteError(StorageException):
    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Could not delete stored document: {reason}",
            "STORAGE_DELETE_ERROR",
            storage_ref,
            reason=reason,
        )


class StorageChecksumMismatchError(StorageException):
    """Bytes on disk do not hash to the checksum computed before the write."""

    def __init__(self, storage_ref: str, expected: str, actual: str) -> None:
        super().__init__(
            "Stored document failed checksum verification",
            "STORAGE_CHECKSUM_ERROR",
            storage_ref,
            expected=expected,
            actual=actual,
        )


class StoragePermissionError(StorageException):
    """Reference resolves outside the storage root."""

    def __init__(self, storage_ref: str, operation: str) -> None:
        super().__init__(
            f"Storage reference not allowed for {operation}",
            "STORAGE_PERMISSION_ERROR",
            storage_ref,
            operation=operation,
        )
