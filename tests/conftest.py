"""Pytest configuration and fixtures for the customer journey service.

Uses app.main:app for HTTP tests and app.infrastructure.persistence.database
for DB-dependent fixtures. In-memory repositories stand in for Postgres in
unit and API tests; integration tests use the real database and are marked
requires_db.
"""

import os
import tempfile
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, BinaryIO

# Settings are validated on first use; provide the required values before
# app.main is imported (create_app() reads them).
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("STORAGE_ROOT", tempfile.mkdtemp(prefix="journey-storage-"))

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.dependencies import (
    get_http_client,
    get_read_repositories,
    get_storage_service,
    get_write_repositories,
)
from app.application.dtos.actor import Actor
from app.application.dtos.document import DocumentUploadCreate
from app.application.dtos.generation import DispatchRequest
from app.core.limiter import limiter
from app.domain.entities.assessment import AssessmentEntity
from app.domain.entities.documents import DocumentRequest, UploadedDocument
from app.domain.entities.generation_job import GenerationJobEntity
from app.domain.entities.questionnaire import Answer, DiscoveryQuestion
from app.domain.enums import ActorRole, AnswerFormat
from app.domain.exceptions import GenerationDispatchError
from app.infrastructure.persistence import database
from app.infrastructure.security.jwt import create_actor_token
from app.main import app

FIXED_NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock for use cases that take clock=."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class InMemoryAssessmentRepository:
    def __init__(self) -> None:
        self.items: dict[str, AssessmentEntity] = {}

    def add(self, assessment: AssessmentEntity) -> AssessmentEntity:
        self.items[assessment.id] = assessment
        return assessment

    async def get_by_id(self, assessment_id: str) -> AssessmentEntity | None:
        found = self.items.get(assessment_id)
        return replace(found) if found else None

    async def set_approval(
        self, assessment_id: str, approved_at: datetime, approved_by: str
    ) -> bool:
        found = self.items.get(assessment_id)
        if found is None or found.approved_at is not None:
            return False
        found.approved_at = approved_at
        found.approved_by = approved_by
        return True

    async def set_submitted(self, assessment_id: str, submitted_at: datetime) -> bool:
        found = self.items.get(assessment_id)
        if found is None or found.submitted_at is not None:
            return False
        found.submitted_at = submitted_at
        return True


class InMemoryGenerationJobRepository:
    def __init__(self) -> None:
        self.items: dict[str, GenerationJobEntity] = {}
        self.saves = 0

    def add(self, job: GenerationJobEntity) -> GenerationJobEntity:
        if job.id is None:
            job.id = f"job-{job.assessment_id}"
        self.items[job.assessment_id] = job
        return job

    async def get_by_assessment(self, assessment_id: str) -> GenerationJobEntity | None:
        found = self.items.get(assessment_id)
        return replace(found) if found else None

    async def lock_for_trigger(self, assessment_id: str) -> GenerationJobEntity:
        if assessment_id not in self.items:
            self.add(GenerationJobEntity(assessment_id=assessment_id))
        return replace(self.items[assessment_id])

    async def save(self, job: GenerationJobEntity) -> GenerationJobEntity:
        self.saves += 1
        stored = replace(job, id=job.id or f"job-{job.assessment_id}")
        self.items[job.assessment_id] = stored
        return replace(stored)


class InMemoryQuestionRepository:
    def __init__(self) -> None:
        self.items: list[DiscoveryQuestion] = []

    def add(self, *questions: DiscoveryQuestion) -> None:
        self.items.extend(questions)

    async def get_by_id(self, question_id: str) -> DiscoveryQuestion | None:
        return next((q for q in self.items if q.id == question_id), None)

    async def list_by_assessment(self, assessment_id: str) -> list[DiscoveryQuestion]:
        return sorted(
            (q for q in self.items if q.assessment_id == assessment_id),
            key=lambda q: (q.dimension_key, q.display_order),
        )

    async def count_by_assessment(self, assessment_id: str) -> int:
        return len([q for q in self.items if q.assessment_id == assessment_id])


class InMemoryAnswerRepository:
    def __init__(self, clock: FakeClock) -> None:
        self.items: dict[tuple[str, str], Answer] = {}
        self.clock = clock

    async def list_by_assessment(self, assessment_id: str) -> dict[str, Answer]:
        return {
            qid: answer for (aid, qid), answer in self.items.items() if aid == assessment_id
        }

    async def upsert(
        self,
        assessment_id: str,
        question_id: str,
        answer_text: str | None,
        answer_json: Any,
        answered_by: str | None,
    ) -> Answer:
        answer = Answer(
            question_id=question_id,
            assessment_id=assessment_id,
            answer_text=answer_text,
            answer_json=answer_json,
            answered_by=answered_by,
            updated_at=self.clock(),
        )
        self.items[(assessment_id, question_id)] = answer
        return answer


class InMemoryDocumentRequestRepository:
    def __init__(self) -> None:
        self.items: list[DocumentRequest] = []

    def add(self, *requests: DocumentRequest) -> None:
        self.items.extend(requests)

    async def get_by_id(self, request_id: str) -> DocumentRequest | None:
        return next((r for r in self.items if r.id == request_id), None)

    async def list_by_assessment(self, assessment_id: str) -> list[DocumentRequest]:
        return [r for r in self.items if r.assessment_id == assessment_id]

    async def count_by_assessment(self, assessment_id: str) -> int:
        return len(await self.list_by_assessment(assessment_id))


class InMemoryUploadRepository:
    def __init__(self, clock: FakeClock) -> None:
        self.items: dict[str, UploadedDocument] = {}
        self.clock = clock
        self.fail_create = False
        self._seq = 0

    async def create(self, data: DocumentUploadCreate) -> UploadedDocument:
        if self.fail_create:
            raise RuntimeError("insert failed")
        self._seq += 1
        doc = UploadedDocument(
            id=f"doc-{self._seq}",
            assessment_id=data.assessment_id,
            slot_key=data.slot_key,
            file_name=data.file_name,
            file_size=data.file_size,
            file_type=data.file_type,
            storage_ref=data.storage_ref,
            uploaded_by=data.uploaded_by,
            document_request_id=data.document_request_id,
            created_at=self.clock(),
        )
        self.items[doc.id] = doc
        return doc

    async def get_by_id(self, document_id: str) -> UploadedDocument | None:
        return self.items.get(document_id)

    async def list_by_assessment(self, assessment_id: str) -> list[UploadedDocument]:
        return [d for d in self.items.values() if d.assessment_id == assessment_id]

    async def delete(self, document_id: str) -> bool:
        return self.items.pop(document_id, None) is not None


class FakeRepositories:
    """Same attribute names as app.api.v1.dependencies.Repositories."""

    def __init__(self, clock: FakeClock) -> None:
        self.assessments = InMemoryAssessmentRepository()
        self.jobs = InMemoryGenerationJobRepository()
        self.questions = InMemoryQuestionRepository()
        self.answers = InMemoryAnswerRepository(clock)
        self.document_requests = InMemoryDocumentRequestRepository()
        self.uploads = InMemoryUploadRepository(clock)
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1


class FakeStorage:
    """IStorageService keeping bytes in a dict."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        self.objects[storage_ref] = file_data.read()
        return {"storage_ref": storage_ref, "checksum": expected_checksum}

    async def download(self, storage_ref: str):
        yield self.objects[storage_ref]

    async def delete(self, storage_ref: str) -> bool:
        self.deleted.append(storage_ref)
        return self.objects.pop(storage_ref, None) is not None

    async def generate_download_url(
        self, storage_ref: str, expiration: timedelta = timedelta(hours=1)
    ) -> str:
        return f"/download/{storage_ref}"


class FakeNotificationService:
    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []

    async def send(self, to_emails: list[str], subject: str, body: str) -> None:
        self.sent.append({"to": to_emails, "subject": subject, "body": body})


class FakeDispatcher:
    """IGenerationDispatcher that records requests; set error to make it fail."""

    def __init__(self, execution_id: str | None = "exec-1") -> None:
        self.requests: list[DispatchRequest] = []
        self.execution_id = execution_id
        self.error: str | None = None

    async def dispatch(self, request: DispatchRequest) -> str | None:
        self.requests.append(request)
        if self.error is not None:
            raise GenerationDispatchError(self.error)
        return self.execution_id


def make_assessment(assessment_id: str = "asm-1", **kwargs: Any) -> AssessmentEntity:
    defaults: dict[str, Any] = {
        "company_name": "Acme Ltd",
        "contact_email": "owner@acme.test",
        "prospect_created_at": FIXED_NOW - timedelta(days=30),
    }
    defaults.update(kwargs)
    return AssessmentEntity(id=assessment_id, **defaults)


def make_question(
    question_id: str,
    assessment_id: str = "asm-1",
    dimension_key: str = "operations",
    **kwargs: Any,
) -> DiscoveryQuestion:
    defaults: dict[str, Any] = {
        "question_text": f"Question {question_id}?",
        "answer_format": AnswerFormat.TEXT,
    }
    defaults.update(kwargs)
    return DiscoveryQuestion(
        id=question_id,
        assessment_id=assessment_id,
        dimension_key=dimension_key,
        **defaults,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repos(clock: FakeClock) -> FakeRepositories:
    return FakeRepositories(clock)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def notifier() -> FakeNotificationService:
    return FakeNotificationService()


@pytest.fixture
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def admin() -> Actor:
    return Actor(identity="consultant@firm.test", role=ActorRole.ADMIN)


@pytest.fixture
def customer() -> Actor:
    return Actor(identity="owner@acme.test", role=ActorRole.CUSTOMER)


@pytest.fixture
def admin_headers(admin: Actor) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_actor_token(admin.identity, admin.role)}"}


@pytest.fixture
def customer_headers(customer: Actor) -> dict[str, str]:
    token = create_actor_token(customer.identity, customer.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def assessment_factory():
    return make_assessment


@pytest.fixture
def question_factory():
    return make_question


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    limiter.reset()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def api(
    client: AsyncClient, repos: FakeRepositories, storage: FakeStorage
) -> AsyncClient:
    """HTTP client with repositories and storage replaced by in-memory fakes."""
    app.dependency_overrides[get_read_repositories] = lambda: repos
    app.dependency_overrides[get_write_repositories] = lambda: repos
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_http_client] = lambda: None
    try:
        yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL. Skips (pytest.skip) when Postgres is not
    configured. Use @pytest.mark.requires_db to mark tests that need this
    fixture; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
