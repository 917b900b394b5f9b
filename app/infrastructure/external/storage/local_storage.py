"""Local filesystem storage for uploaded documents.

Objects live under storage_root at their storage reference
(assessments/{assessment_id}/{slot_key}/{stamp}_{name}). Each object has a
.meta.json sidecar with its content type, checksum and slot metadata.
Download URLs carry an opaque token that only this process can resolve.
"""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from collections.abc import AsyncIterator
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, BinaryIO

import aiofiles
import aiofiles.os

from app.infrastructure.exceptions import (
    StorageChecksumMismatchError,
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_token

logger = get_logger(__name__)

DOWNLOAD_PATH = "/api/v1/storage/download"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
_CHUNK = 64 * 1024


class _DownloadTokens:
    """In-memory token -> (storage_ref, expires_at) map."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[str, datetime]] = {}

    def issue(self, storage_ref: str, ttl: timedelta) -> str:
        now = utc_now()
        self._entries = {t: e for t, e in self._entries.items() if e[1] > now}
        token = generate_token()
        self._entries[token] = (storage_ref, now + ttl)
        return token

    def resolve(self, token: str) -> str | None:
        entry = self._entries.get(token)
        if entry is None:
            return None
        if utc_now() > entry[1]:
            self._entries.pop(token, None)
            logger.debug("Download token expired")
            return None
        return entry[0]


class LocalStorageService:
    """Stores document bytes on disk; satisfies IStorageService.

    Writes land in a temp file beside the target and are renamed into place
    only once the bytes hash to the expected checksum.
    """

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else None
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)
        self._tokens = _DownloadTokens()

    def _resolve(self, storage_ref: str, operation: str) -> Path:
        path = (self.storage_root / storage_ref).resolve()
        if not path.is_relative_to(self.storage_root):
            raise StoragePermissionError(storage_ref, operation)
        return path

    @staticmethod
    def _sidecar(path: Path) -> Path:
        return path.with_name(path.name + ".meta.json")

    @staticmethod
    async def _sha256_of(path: Path) -> str:
        digest = hashlib.sha256()
        async with aiofiles.open(path, "rb") as f:
            while chunk := await f.read(_CHUNK):
                digest.update(chunk)
        return digest.hexdigest()

    async def _write_verified(
        self, file_data: BinaryIO, target: Path, storage_ref: str, expected_checksum: str
    ) -> int:
        """Copy file_data into target atomically; return the byte count."""
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".tmp_")
        os.close(fd)
        tmp = Path(tmp_name)
        try:
            digest = hashlib.sha256()
            size = 0
            async with aiofiles.open(tmp, "wb") as out:
                while chunk := file_data.read(_CHUNK):
                    digest.update(chunk)
                    size += len(chunk)
                    await out.write(chunk)
            actual = digest.hexdigest()
            if actual != expected_checksum:
                raise StorageChecksumMismatchError(storage_ref, expected_checksum, actual)
            tmp.chmod(0o640)
            tmp.replace(target)
            return size
        finally:
            tmp.unlink(missing_ok=True)

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Store file_data under storage_ref. Identical content already stored there is accepted."""
        target = self._resolve(storage_ref, "upload")
        if target.exists():
            if await self._sha256_of(target) != expected_checksum:
                raise StorageUploadError(storage_ref, "a different file is already stored here")
            return {
                "storage_ref": storage_ref,
                "checksum": expected_checksum,
                "size": target.stat().st_size,
            }

        try:
            target.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            size = await self._write_verified(file_data, target, storage_ref, expected_checksum)
            stored_at = utc_now().isoformat()
            sidecar = {
                "checksum": expected_checksum,
                "size": size,
                "content_type": content_type,
                "stored_at": stored_at,
                **(metadata or {}),
            }
            async with aiofiles.open(self._sidecar(target), "w") as f:
                await f.write(json.dumps(sidecar))
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e

        logger.debug("Stored %s (%d bytes)", storage_ref, size)
        return {
            "storage_ref": storage_ref,
            "checksum": expected_checksum,
            "size": size,
            "uploaded_at": stored_at,
        }

    async def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        path = self._resolve(storage_ref, "download")
        if not path.is_file():
            raise StorageNotFoundError(storage_ref)
        try:
            async with aiofiles.open(path, "rb") as f:
                while chunk := await f.read(_CHUNK):
                    yield chunk
        except OSError as e:
            raise StorageDownloadError(storage_ref, str(e)) from e

    async def delete(self, storage_ref: str) -> bool:
        """Remove the object and its sidecar, then any directories left empty."""
        path = self._resolve(storage_ref, "delete")
        if not path.is_file():
            return False
        try:
            await aiofiles.os.remove(path)
            sidecar = self._sidecar(path)
            if sidecar.exists():
                await aiofiles.os.remove(sidecar)
        except OSError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e

        directory = path.parent
        while directory != self.storage_root and not any(directory.iterdir()):
            directory.rmdir()
            directory = directory.parent
        return True

    async def exists(self, storage_ref: str) -> bool:
        try:
            return self._resolve(storage_ref, "exists").is_file()
        except StoragePermissionError:
            return False

    async def get_content_type(self, storage_ref: str) -> str:
        sidecar = self._sidecar(self._resolve(storage_ref, "read_metadata"))
        if not sidecar.exists():
            return DEFAULT_CONTENT_TYPE
        async with aiofiles.open(sidecar) as f:
            meta = json.loads(await f.read())
        return meta.get("content_type") or DEFAULT_CONTENT_TYPE

    async def generate_download_url(
        self,
        storage_ref: str,
        expiration: timedelta = timedelta(hours=1),
    ) -> str:
        if not await self.exists(storage_ref):
            raise StorageNotFoundError(storage_ref)
        path = f"{DOWNLOAD_PATH}/{self._tokens.issue(storage_ref, expiration)}"
        return f"{self.base_url}{path}" if self.base_url else path

    def validate_download_token(self, token: str) -> str | None:
        """Storage reference for a live token, else None."""
        return self._tokens.resolve(token)
