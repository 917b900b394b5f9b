"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the actor, repositories and application use
cases. All use cases are built from infrastructure implementations here;
routes depend only on these dependencies, not on infra directly.
"""

from .auth import (
    get_current_actor,
    get_current_actor_optional,
    require_admin,
    require_customer,
)
from .background import dispatch_generation
from .db import Repositories, get_read_repositories, get_write_repositories
from .services import (
    build_generation_dispatcher,
    get_http_client,
    get_notification_service,
    get_storage_service,
)
from .use_cases import (
    build_approval_gate,
    build_supervisor,
    build_upload_policy,
    get_approval_gate,
    get_document_slot_service,
    get_document_slot_service_for_write,
    get_generation_supervisor,
    get_generation_supervisor_read,
    get_journey_use_case,
    get_questionnaire_service,
    get_questionnaire_service_for_write,
)

__all__ = [
    "Repositories",
    "build_approval_gate",
    "build_generation_dispatcher",
    "build_supervisor",
    "build_upload_policy",
    "dispatch_generation",
    "get_approval_gate",
    "get_current_actor",
    "get_current_actor_optional",
    "get_document_slot_service",
    "get_document_slot_service_for_write",
    "get_generation_supervisor",
    "get_generation_supervisor_read",
    "get_http_client",
    "get_journey_use_case",
    "get_notification_service",
    "get_questionnaire_service",
    "get_questionnaire_service_for_write",
    "get_read_repositories",
    "get_storage_service",
    "get_write_repositories",
    "require_admin",
    "require_customer",
]
