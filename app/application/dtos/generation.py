"""DTOs for the generation job use cases (no dependency on ORM)."""

from dataclasses import dataclass

from app.domain.entities.generation_job import GenerationJobEntity


@dataclass(frozen=True)
class TriggerResult:
    """Outcome of trigger(): triggered is False when a running job was left alone."""

    triggered: bool
    job: GenerationJobEntity


@dataclass(frozen=True)
class GenerationCallback:
    """Report sent by the external workflow when the job finishes."""

    assessment_id: str
    status: str
    generation_job_id: str | None = None
    error_message: str | None = None
    error_node: str | None = None
    questions_count: int | None = None
    documents_count: int | None = None
    external_execution_id: str | None = None


@dataclass(frozen=True)
class DispatchRequest:
    """Payload the dispatcher sends to the external workflow."""

    assessment_id: str
    generation_job_id: str
    callback_url: str
    auto_approve: bool
