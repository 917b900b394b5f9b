"""Actor authentication dependencies (composition root).

Tokens are issued elsewhere; this service only verifies them and maps the
claims to an Actor.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.dtos.actor import Actor
from app.domain.enums import ActorRole
from app.domain.exceptions import AuthorizationException
from app.infrastructure.security.jwt import ROLE_CLAIM, verify_token
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_actor_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> Actor | None:
    """Return the actor from the Bearer JWT if present and valid; else None."""
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        logger.info("Rejected bearer token: %s", e)
        return None
    return Actor(identity=str(payload["sub"]), role=ActorRole(payload[ROLE_CLAIM]))


async def get_current_actor(
    actor: Annotated[Actor | None, Depends(get_current_actor_optional)],
) -> Actor:
    """Return the actor from the JWT; raise 401 if missing or invalid."""
    if actor is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return actor


async def require_admin(
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> Actor:
    if not actor.is_admin:
        raise AuthorizationException("assessment", "admin", message="Admin role required")
    return actor


async def require_customer(
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> Actor:
    if not actor.is_customer:
        raise AuthorizationException(
            "assessment", "customer", message="Customer role required"
        )
    return actor
