"""Storage: local filesystem backend for uploaded documents.

StorageFactory creates the backend from app.core.config. Implementations
satisfy IStorageService (upload, download, delete, generate_download_url).
"""

from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.local_storage import LocalStorageService

__all__ = [
    "LocalStorageService",
    "StorageFactory",
]
