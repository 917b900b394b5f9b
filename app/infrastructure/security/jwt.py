"""JWT token creation and verification for authentication.

Tokens carry the caller identity in ``sub`` and its role (admin or customer)
in ``role``. Uses app.core.config for secret and algorithm.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings
from app.domain.enums import ActorRole
from app.shared.utils.datetime import utc_now

ROLE_CLAIM = "role"


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (sub, role).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = utc_now() + ttl
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def create_actor_token(
    identity: str, role: ActorRole, expires_delta: timedelta | None = None
) -> str:
    """Token for one actor: sub=identity, role=role."""
    return create_access_token({"sub": identity, ROLE_CLAIM: role.value}, expires_delta)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp, sub and a known role. Raises ValueError if the
    token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    if payload.get(ROLE_CLAIM) not in ActorRole.values():
        raise ValueError("Token missing or unknown role claim")
    return payload
