"""Token download endpoint for locally stored documents."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.api.v1.dependencies import get_storage_service
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.external.storage.local_storage import LocalStorageService

router = APIRouter()


@router.get("/download/{token}")
async def download_file(
    token: str,
    storage: Annotated[LocalStorageService, Depends(get_storage_service)],
) -> StreamingResponse:
    """Stream a file for a valid, unexpired download token. The token is the credential."""
    storage_ref = storage.validate_download_token(token)
    if storage_ref is None or not await storage.exists(storage_ref):
        raise ResourceNotFoundException("download", token)
    content_type = await storage.get_content_type(storage_ref)
    file_name = storage_ref.rsplit("/", 1)[-1]
    return StreamingResponse(
        storage.download(storage_ref),
        media_type=content_type,
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )
