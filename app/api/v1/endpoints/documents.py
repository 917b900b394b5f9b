"""Document slot API: thin routes delegating to DocumentSlotService."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, Response, UploadFile

from app.api.v1.dependencies import (
    get_current_actor,
    get_document_slot_service,
    get_document_slot_service_for_write,
)
from app.application.dtos.actor import Actor
from app.application.use_cases import DocumentSlotService
from app.core.limiter import limit_upload, limit_writes
from app.schemas.documents import DocumentListResponse, UploadedDocumentItem

assessment_router = APIRouter()
router = APIRouter()


@assessment_router.post(
    "/{assessment_id}/documents",
    response_model=UploadedDocumentItem,
    status_code=201,
)
@limit_upload
async def upload_document(
    request: Request,
    assessment_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[DocumentSlotService, Depends(get_document_slot_service_for_write)],
    slot_key: str = Form(...),
    file: UploadFile = File(...),
):
    """Upload one file into a slot (a document request id or '__other__')."""
    if not file.filename:
        raise HTTPException(status_code=400, detail="Filename required")
    created = await service.upload(
        actor,
        assessment_id,
        slot_key,
        file_data=file.file,
        file_name=file.filename,
        content_type=file.content_type,
    )
    return UploadedDocumentItem.model_validate(created)


@assessment_router.get("/{assessment_id}/documents", response_model=DocumentListResponse)
async def list_documents(
    assessment_id: str,
    _: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[DocumentSlotService, Depends(get_document_slot_service)],
):
    """Uploads grouped by slot key, oldest first, with one-hour download URLs."""
    grouped = await service.list_documents(assessment_id)
    return DocumentListResponse(
        documents={
            slot: [UploadedDocumentItem.model_validate(d) for d in docs]
            for slot, docs in grouped.items()
        }
    )


@router.delete("/{document_id}", status_code=204)
@limit_writes
async def delete_document(
    request: Request,
    document_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[DocumentSlotService, Depends(get_document_slot_service_for_write)],
) -> Response:
    """Remove one of the caller's own uploads."""
    await service.remove(actor, document_id)
    return Response(status_code=204)
