"""Create a new role."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from wms.application.events import InMemoryEventBus
from wms.application.result import ErrorKind, Result
from wms.domain.role import Role, RoleName, RoleRepository, RoleSlug
from wms.domain.shared import DomainException, EntityId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateRoleRequest:
    name: Optional[str]
    slug: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[str] = None


@dataclass(frozen=True)
class CreateRoleResponse:
    role: Role
    message: str


class CreateRoleUseCase:
    """Create a custom role. The slug is derived from the name when omitted."""

    def __init__(
        self,
        role_repository: RoleRepository,
        event_bus: Optional[InMemoryEventBus] = None,
    ):
        self._role_repo = role_repository
        self._event_bus = event_bus

    async def execute(self, request: CreateRoleRequest) -> Result[CreateRoleResponse]:
        try:
            if request.name is None or not request.name.strip():
                return Result.fail("Role name is required", ErrorKind.VALIDATION)

            errors: list[str] = []
            name: Optional[RoleName] = None
            slug: Optional[RoleSlug] = None
            try:
                name = RoleName.create(request.name)
            except DomainException as e:
                errors.append(e.message)
            try:
                slug = (
                    RoleSlug.create(request.slug)
                    if request.slug
                    else RoleSlug.from_name(request.name)
                )
            except DomainException as e:
                errors.append(e.message)
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            conflicts: list[str] = []
            if await self._role_repo.exists_by_name(name):  # type: ignore[arg-type]
                conflicts.append("Role name already exists")
            if await self._role_repo.exists_by_slug(slug):  # type: ignore[arg-type]
                conflicts.append("Role slug already exists")
            if conflicts:
                return Result.fail(", ".join(conflicts), ErrorKind.CONFLICT)

            created_by = (
                EntityId.from_string(request.created_by) if request.created_by else None
            )
            role = Role.create(
                name,  # type: ignore[arg-type]
                slug,  # type: ignore[arg-type]
                description=request.description,
                created_by=created_by,
            )
            saved = await self._role_repo.save(role)

            if self._event_bus is not None:
                await self._event_bus.publish(role.pull_events())

            logger.info("Created role %s (%s)", saved.id, saved.slug.value)
            return Result.ok(
                CreateRoleResponse(role=saved, message="Role created successfully"),
            )
        except Exception as e:
            logger.warning("Failed to create role: %s", e)
            return Result.from_exception(e, "Failed to create role")
