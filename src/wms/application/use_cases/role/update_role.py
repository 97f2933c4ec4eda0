"""Rename or re-describe a role."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from wms.application.events import InMemoryEventBus
from wms.application.result import ErrorKind, Result
from wms.application.use_cases._validation import validate_entity_id
from wms.domain.role import Role, RoleName, RoleRepository
from wms.domain.shared import DomainException, EntityId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateRoleRequest:
    role_id: Optional[str]
    name: Optional[str] = None
    description: Optional[str] = None
    updated_by: Optional[str] = None


@dataclass(frozen=True)
class UpdateRoleResponse:
    role: Role
    message: str


class UpdateRoleUseCase:
    def __init__(
        self,
        role_repository: RoleRepository,
        event_bus: Optional[InMemoryEventBus] = None,
    ):
        self._role_repo = role_repository
        self._event_bus = event_bus

    async def execute(self, request: UpdateRoleRequest) -> Result[UpdateRoleResponse]:
        try:
            errors = validate_entity_id(request.role_id, "Role ID")
            name: Optional[RoleName] = None
            if request.name:
                try:
                    name = RoleName.create(request.name)
                except DomainException as e:
                    errors.append(e.message)
            if request.name is None and request.description is None:
                errors.append("At least one field must be provided for update")
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            role_id = EntityId.from_string(request.role_id)  # type: ignore[arg-type]
            role = await self._role_repo.find_by_id(role_id)
            if role is None:
                return Result.fail("Role not found", ErrorKind.NOT_FOUND)
            if not role.can_be_modified():
                return Result.fail(
                    "System roles cannot be modified",
                    ErrorKind.BUSINESS_RULE,
                )

            if name is not None and name != role.name:
                existing = await self._role_repo.find_by_name(name)
                if existing is not None and existing.id != role.id:
                    return Result.fail("Role name already exists", ErrorKind.CONFLICT)

            updated_by = (
                EntityId.from_string(request.updated_by) if request.updated_by else None
            )
            role.update(name=name, description=request.description, updated_by=updated_by)
            saved = await self._role_repo.save(role)

            if self._event_bus is not None:
                await self._event_bus.publish(role.pull_events())

            return Result.ok(
                UpdateRoleResponse(role=saved, message="Role updated successfully"),
            )
        except Exception as e:
            logger.warning("Failed to update role %s: %s", request.role_id, e)
            return Result.from_exception(e, "Failed to update role")
