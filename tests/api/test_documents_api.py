"""Document slot upload, listing, removal and token download over HTTP."""

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies import get_storage_service
from app.domain.entities.documents import OTHER_SLOT_KEY, DocumentRequest
from app.infrastructure.external.storage.local_storage import LocalStorageService
from app.main import app

PDF_BYTES = b"%PDF-1.4 org chart"


@pytest.fixture
def approved(repos, clock, assessment_factory):
    repos.assessments.add(
        assessment_factory("asm-1", approved_at=clock.now, approved_by="consultant@firm.test")
    )
    repos.document_requests.add(
        DocumentRequest(id="req-1", assessment_id="asm-1", document_type="Org chart")
    )


@pytest.fixture
def local_storage(api, tmp_path) -> LocalStorageService:
    service = LocalStorageService(str(tmp_path))
    app.dependency_overrides[get_storage_service] = lambda: service
    return service


async def _upload(api: AsyncClient, headers, slot_key: str = "req-1", name: str = "Org Chart.pdf"):
    return await api.post(
        "/api/v1/assessments/asm-1/documents",
        data={"slot_key": slot_key},
        files={"file": (name, PDF_BYTES, "application/pdf")},
        headers=headers,
    )


async def test_upload_and_list(api: AsyncClient, customer_headers, approved) -> None:
    created = await _upload(api, customer_headers)
    assert created.status_code == 201
    doc = created.json()
    assert doc["slot_key"] == "req-1"
    assert doc["file_name"] == "Org Chart.pdf"
    assert doc["file_size"] == len(PDF_BYTES)
    assert doc["uploaded_by"] == "customer"

    listing = await api.get("/api/v1/assessments/asm-1/documents", headers=customer_headers)
    assert listing.status_code == 200
    grouped = listing.json()["documents"]
    assert [d["id"] for d in grouped["req-1"]] == [doc["id"]]
    assert grouped["req-1"][0]["download_url"]


async def test_upload_rejects_unaccepted_type(api: AsyncClient, customer_headers, approved) -> None:
    response = await api.post(
        "/api/v1/assessments/asm-1/documents",
        data={"slot_key": OTHER_SLOT_KEY},
        files={"file": ("setup.exe", b"MZ", "application/x-msdownload")},
        headers=customer_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_upload_unknown_slot_returns_404(api: AsyncClient, customer_headers, approved) -> None:
    response = await _upload(api, customer_headers, slot_key="req-missing")
    assert response.status_code == 404


async def test_upload_before_approval_forbidden(
    api: AsyncClient, customer_headers, repos, assessment_factory
) -> None:
    repos.assessments.add(assessment_factory("asm-1"))
    response = await _upload(api, customer_headers, slot_key=OTHER_SLOT_KEY)
    assert response.status_code == 403


async def test_remove_own_upload_only(
    api: AsyncClient, customer_headers, admin_headers, approved
) -> None:
    doc_id = (await _upload(api, admin_headers, slot_key=OTHER_SLOT_KEY)).json()["id"]
    forbidden = await api.delete(f"/api/v1/documents/{doc_id}", headers=customer_headers)
    assert forbidden.status_code == 403
    removed = await api.delete(f"/api/v1/documents/{doc_id}", headers=admin_headers)
    assert removed.status_code == 204
    again = await api.delete(f"/api/v1/documents/{doc_id}", headers=admin_headers)
    assert again.status_code == 404


async def test_download_by_token(
    api: AsyncClient, customer_headers, approved, local_storage
) -> None:
    await _upload(api, customer_headers)
    listing = await api.get("/api/v1/assessments/asm-1/documents", headers=customer_headers)
    url = listing.json()["documents"]["req-1"][0]["download_url"]
    response = await api.get(url)
    assert response.status_code == 200
    assert response.content == PDF_BYTES
    assert response.headers["content-type"] == "application/pdf"
    assert "Org_Chart.pdf" in response.headers["content-disposition"]


async def test_download_with_bad_token(api: AsyncClient, local_storage) -> None:
    response = await api.get("/api/v1/storage/download/not-a-token")
    assert response.status_code == 404
