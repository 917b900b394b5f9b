"""Domain enumerations for the customer journey.

Enums represent fixed sets of domain values (job states, answer formats,
actor roles, stage statuses).
"""

from enum import Enum


class _ValuesMixin:
    """Adds values() for str enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all enum values as strings (e.g. for validation or serialization)."""
        return [m.value for m in cls]  # type: ignore[attr-defined]


class GenerationJobState(_ValuesMixin, str, Enum):
    """Lifecycle of the external requirement-generation job.

    not_started -> running -> completed | failed; failed -> running on retry;
    running -> running only on a forced restart. completed is terminal.
    """

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (GenerationJobState.COMPLETED, GenerationJobState.FAILED)


class AnswerFormat(_ValuesMixin, str, Enum):
    """Input format of a discovery question; selects the save strategy."""

    TEXT = "text"
    NUMBER = "number"
    PERCENTAGE = "percentage"
    YES_NO = "yes_no"
    SELECT_ONE = "select_one"
    SELECT_MANY = "select_many"
    SCALE_1_5 = "scale_1_5"

    @property
    def is_debounced(self) -> bool:
        """Free-form formats are saved after a quiet period, the rest instantly."""
        return self in (AnswerFormat.TEXT, AnswerFormat.NUMBER, AnswerFormat.PERCENTAGE)

    @property
    def has_options(self) -> bool:
        return self in (AnswerFormat.SELECT_ONE, AnswerFormat.SELECT_MANY)


class ConfidenceImpact(_ValuesMixin, str, Enum):
    """How strongly an answer or document affects downstream confidence."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FormSubmissionStatus(_ValuesMixin, str, Enum):
    """Derived status of the requirements form. completed is terminal."""

    DRAFT = "draft"
    IN_REVIEW = "in_review"
    COMPLETED = "completed"


class ActorRole(_ValuesMixin, str, Enum):
    """Who is acting: the consulting admin or the customer."""

    ADMIN = "admin"
    CUSTOMER = "customer"


class SaveStatus(_ValuesMixin, str, Enum):
    """Per-question autosave status shown next to each field."""

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class StageStatus(_ValuesMixin, str, Enum):
    """Display status of one journey stage."""

    COMPLETED = "completed"
    ACTIVE = "active"
    UPCOMING = "upcoming"
    LOCKED = "locked"
