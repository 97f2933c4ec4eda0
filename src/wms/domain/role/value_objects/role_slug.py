"""RoleSlug value object."""

from __future__ import annotations

import re
from dataclasses import dataclass

from wms.domain.role.exceptions import InvalidRoleSlugError

ROLE_SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
MIN_ROLE_SLUG_LENGTH = 2
MAX_ROLE_SLUG_LENGTH = 100

RESERVED_SLUGS = frozenset(
    {
        "api",
        "admin",
        "www",
        "mail",
        "ftp",
        "root",
        "test",
        "guest",
        "null",
        "undefined",
        "system",
        "config",
        "settings",
    },
)
SYSTEM_ROLE_SLUGS = frozenset({"super-admin", "admin", "system-admin"})


@dataclass(frozen=True)
class RoleSlug:
    """URL-safe, lowercase role identifier."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            msg = "Role slug cannot be empty"
            raise InvalidRoleSlugError(msg)

        normalized = self.value.strip().lower()

        if len(normalized) < MIN_ROLE_SLUG_LENGTH:
            msg = f"Role slug must be at least {MIN_ROLE_SLUG_LENGTH} characters long"
            raise InvalidRoleSlugError(msg)
        if len(normalized) > MAX_ROLE_SLUG_LENGTH:
            msg = f"Role slug cannot exceed {MAX_ROLE_SLUG_LENGTH} characters"
            raise InvalidRoleSlugError(msg)
        if not ROLE_SLUG_PATTERN.match(normalized):
            msg = "Role slug can only contain lowercase letters, numbers, and hyphens"
            raise InvalidRoleSlugError(msg)
        if normalized.startswith("-") or normalized.endswith("-"):
            msg = "Role slug cannot start or end with a hyphen"
            raise InvalidRoleSlugError(msg)
        if "--" in normalized:
            msg = "Role slug cannot contain consecutive hyphens"
            raise InvalidRoleSlugError(msg)
        if normalized in RESERVED_SLUGS:
            msg = "This role slug is reserved and cannot be used"
            raise InvalidRoleSlugError(msg)

        object.__setattr__(self, "value", normalized)

    @classmethod
    def create(cls, value: str) -> RoleSlug:
        return cls(value)

    @classmethod
    def from_name(cls, name: str) -> RoleSlug:
        """Derive a slug from a role name, e.g. ``Warehouse Staff`` -> ``warehouse-staff``."""
        if not name or not name.strip():
            msg = "Name cannot be empty"
            raise InvalidRoleSlugError(msg)

        slug = name.strip().lower()
        slug = re.sub(r"[^a-z0-9\s-]", "", slug)
        slug = re.sub(r"\s+", "-", slug)
        slug = re.sub(r"-+", "-", slug)
        slug = slug.strip("-")
        return cls(slug)

    @classmethod
    def from_persistence(cls, value: str) -> RoleSlug:
        """Rebuild a stored slug, reserved system slugs included."""
        if not value:
            msg = "Role slug cannot be empty"
            raise InvalidRoleSlugError(msg)
        instance = object.__new__(cls)
        object.__setattr__(instance, "value", value.strip().lower())
        return instance

    def to_display_name(self) -> str:
        return " ".join(word[:1].upper() + word[1:] for word in self.value.split("-"))

    def to_snake_case(self) -> str:
        return self.value.replace("-", "_")

    def is_reserved(self) -> bool:
        return self.value in RESERVED_SLUGS

    def is_system_role(self) -> bool:
        return self.value in SYSTEM_ROLE_SLUGS

    def __str__(self) -> str:
        return self.value
