"""Authenticated caller identity passed into use cases."""

from dataclasses import dataclass

from app.domain.enums import ActorRole


@dataclass(frozen=True)
class Actor:
    """Who is calling: identity (token subject) and role."""

    identity: str
    role: ActorRole

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN

    @property
    def is_customer(self) -> bool:
        return self.role == ActorRole.CUSTOMER
