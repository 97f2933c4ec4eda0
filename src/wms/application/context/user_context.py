"""User context for request-scoped user identity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from wms.domain.shared.entity_id import EntityId

if TYPE_CHECKING:
    from wms.domain.user.aggregates import User

ADMIN_ROLE_SLUGS = frozenset({"super-admin", "admin"})


@dataclass(frozen=True)
class UserContext:
    """
    Immutable context for the current authenticated user.

    Created once per request and passed to use cases as the acting user
    (``created_by`` / ``updated_by``) and for role checks.
    """

    user_id: EntityId
    username: str
    email: str
    role_slugs: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def create(cls, user: User, role_slugs: list[str] | None = None) -> UserContext:
        return cls(
            user_id=user.id,
            username=user.username.value,
            email=user.email.value,
            role_slugs=frozenset(role_slugs or ()),
        )

    def has_any_role(self, *slugs: str) -> bool:
        return bool(self.role_slugs.intersection(slugs))

    @property
    def is_admin(self) -> bool:
        return self.has_any_role(*ADMIN_ROLE_SLUGS)

    def __str__(self) -> str:
        return f"UserContext({self.username})"
