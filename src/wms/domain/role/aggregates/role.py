"""Role aggregate root."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from wms.domain.role.events import RoleCreatedEvent, RoleUpdatedEvent
from wms.domain.role.exceptions import SystemRoleProtectedError
from wms.domain.role.value_objects import RoleName, RoleSlug
from wms.domain.shared.auditable_entity import AuditableEntity
from wms.domain.shared.entity_id import EntityId
from wms.domain.shared.exceptions import ValidationError

MAX_DESCRIPTION_LENGTH = 255

# Lower rank = more authority
ROLE_HIERARCHY: dict[str, int] = {
    "super-admin": 0,
    "admin": 1,
    "administrator": 1,
    "manager": 2,
    "supervisor": 3,
    "team-lead": 4,
    "coordinator": 5,
    "employee": 6,
    "user": 7,
    "guest": 8,
}
UNKNOWN_HIERARCHY_LEVEL = 10

ADMINISTRATIVE_SLUGS = frozenset({"super-admin", "admin", "administrator"})
MANAGEMENT_SLUGS = frozenset({"manager", "supervisor", "team-lead", "coordinator"})


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    description = description.strip()
    if len(description) > MAX_DESCRIPTION_LENGTH:
        msg = f"Role description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
        raise ValidationError(msg)
    return description or None


class Role(AuditableEntity):
    """
    Role aggregate root.

    The slug and the system flag are fixed at creation. System roles can
    be neither deactivated, modified nor deleted.
    """

    def __init__(
        self,
        name: RoleName,
        slug: RoleSlug,
        description: Optional[str] = None,
        is_active: bool = True,
        is_system_role: bool = False,
        **audit,
    ):
        super().__init__(**audit)
        self._name = name
        self._slug = slug
        self._description = _clean_description(description)
        self._is_active = is_active
        self._is_system_role = is_system_role

    @classmethod
    def create(
        cls,
        name: RoleName,
        slug: RoleSlug,
        description: Optional[str] = None,
        is_system_role: bool = False,
        created_by: Optional[EntityId] = None,
    ) -> Role:
        role = cls(
            name=name,
            slug=slug,
            description=description,
            is_system_role=is_system_role,
            created_by=created_by,
            updated_by=created_by,
        )
        role.add_event(
            RoleCreatedEvent(
                role.id,
                name=name.value,
                slug=slug.value,
                created_by=created_by,
            ),
        )
        return role

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        entity_id: EntityId,
        name: RoleName,
        slug: RoleSlug,
        description: Optional[str],
        is_active: bool,
        is_system_role: bool,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime] = None,
        created_by: Optional[EntityId] = None,
        updated_by: Optional[EntityId] = None,
        deleted_by: Optional[EntityId] = None,
    ) -> Role:
        """Rehydrate from storage. Records no events."""
        return cls(
            name=name,
            slug=slug,
            description=description,
            is_active=is_active,
            is_system_role=is_system_role,
            entity_id=entity_id,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
            created_by=created_by,
            updated_by=updated_by,
            deleted_by=deleted_by,
        )

    @property
    def name(self) -> RoleName:
        return self._name

    @property
    def slug(self) -> RoleSlug:
        return self._slug

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def is_system_role(self) -> bool:
        return self._is_system_role

    @property
    def display_name(self) -> str:
        return self._name.value

    @property
    def hierarchy_level(self) -> int:
        return ROLE_HIERARCHY.get(self._slug.value, UNKNOWN_HIERARCHY_LEVEL)

    def update(
        self,
        name: Optional[RoleName] = None,
        description: Optional[str] = None,
        updated_by: Optional[EntityId] = None,
    ) -> None:
        """Rename and/or re-describe the role. No-op when nothing changes."""
        if not self.can_be_modified():
            msg = "System roles cannot be modified"
            raise SystemRoleProtectedError(msg)

        changes: dict[str, Any] = {}
        if name is not None and name != self._name:
            changes["name"] = {"old": self._name.value, "new": name.value}
        if description is not None:
            new_description = _clean_description(description)
            if new_description != self._description:
                changes["description"] = {
                    "old": self._description,
                    "new": new_description,
                }

        if not changes:
            return

        if "name" in changes:
            self._name = name  # type: ignore[assignment]
        if "description" in changes:
            self._description = changes["description"]["new"]
        self.touch(updated_by)
        self.add_event(RoleUpdatedEvent(self.id, changes=changes, updated_by=updated_by))

    def activate(self, updated_by: Optional[EntityId] = None) -> None:
        if self._is_active:
            return
        self._is_active = True
        self.touch(updated_by)
        self.add_event(
            RoleUpdatedEvent(
                self.id,
                changes={"status": {"old": "inactive", "new": "active"}},
                updated_by=updated_by,
            ),
        )

    def deactivate(self, updated_by: Optional[EntityId] = None) -> None:
        if self._is_system_role:
            msg = "System roles cannot be deactivated"
            raise SystemRoleProtectedError(msg)
        if not self._is_active:
            return
        self._is_active = False
        self.touch(updated_by)
        self.add_event(
            RoleUpdatedEvent(
                self.id,
                changes={"status": {"old": "active", "new": "inactive"}},
                updated_by=updated_by,
            ),
        )

    def can_be_deleted(self) -> bool:
        return not self._is_system_role

    def can_be_modified(self) -> bool:
        return not self._is_system_role

    def is_administrative_role(self) -> bool:
        return self._slug.value in ADMINISTRATIVE_SLUGS

    def is_management_role(self) -> bool:
        return self._slug.value in MANAGEMENT_SLUGS

    def has_higher_authority_than(self, other: Role) -> bool:
        return self.hierarchy_level < other.hierarchy_level

    def __repr__(self) -> str:
        return (
            f"Role(id={self.id}, slug={self._slug.value!r}, "
            f"is_active={self._is_active}, is_system_role={self._is_system_role})"
        )
