"""Idempotent creation of the built-in roles."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from wms.domain.role import DEFAULT_ROLE_SLUG, Role, RoleName, RoleRepository, RoleSlug

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleDefinition:
    name: str
    slug: str
    description: str
    is_system_role: bool = False


BUILT_IN_ROLES: tuple[RoleDefinition, ...] = (
    RoleDefinition("Super Admin", "super-admin", "Unrestricted access", True),
    RoleDefinition("Admin", "admin", "Manages users and roles", True),
    RoleDefinition("Manager", "manager", "Manages warehouse operations"),
    RoleDefinition("Supervisor", "supervisor", "Supervises warehouse staff"),
    RoleDefinition("Employee", "employee", "Warehouse staff"),
    RoleDefinition(
        "Viewer",
        DEFAULT_ROLE_SLUG,
        "Read-only access, assigned to new users",
    ),
)


async def seed_roles(
    role_repository: RoleRepository,
    definitions: tuple[RoleDefinition, ...] = BUILT_IN_ROLES,
) -> list[Role]:
    """Create every missing built-in role. Returns only the roles created."""
    created: list[Role] = []
    for definition in definitions:
        # Reserved slugs such as "admin" are only allowed here
        slug = RoleSlug.from_persistence(definition.slug)
        if await role_repository.exists_by_slug(slug):
            continue

        role = Role.create(
            RoleName(definition.name),
            slug,
            description=definition.description,
            is_system_role=definition.is_system_role,
        )
        created.append(await role_repository.save(role))
        logger.info("Seeded role %s", slug)
    return created


async def find_role(role_repository: RoleRepository, slug: str) -> Optional[Role]:
    return await role_repository.find_by_slug(RoleSlug.from_persistence(slug))
