"""Activate or deactivate a role."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from wms.application.events import InMemoryEventBus
from wms.application.result import ErrorKind, Result
from wms.application.use_cases._validation import validate_entity_id
from wms.domain.role import Role, RoleRepository, SystemRoleProtectedError
from wms.domain.shared import EntityId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeRoleStatusRequest:
    role_id: Optional[str]
    is_active: bool
    updated_by: Optional[str] = None


@dataclass(frozen=True)
class ChangeRoleStatusResponse:
    role: Role
    message: str


class ChangeRoleStatusUseCase:
    """Toggle a role. Deactivating a system role is refused."""

    def __init__(
        self,
        role_repository: RoleRepository,
        event_bus: Optional[InMemoryEventBus] = None,
    ):
        self._role_repo = role_repository
        self._event_bus = event_bus

    async def execute(
        self,
        request: ChangeRoleStatusRequest,
    ) -> Result[ChangeRoleStatusResponse]:
        try:
            errors = validate_entity_id(request.role_id, "Role ID")
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            role_id = EntityId.from_string(request.role_id)  # type: ignore[arg-type]
            role = await self._role_repo.find_by_id(role_id)
            if role is None:
                return Result.fail("Role not found", ErrorKind.NOT_FOUND)

            updated_by = (
                EntityId.from_string(request.updated_by) if request.updated_by else None
            )
            try:
                if request.is_active:
                    role.activate(updated_by)
                else:
                    role.deactivate(updated_by)
            except SystemRoleProtectedError as e:
                return Result.fail(e.message, ErrorKind.BUSINESS_RULE)

            saved = await self._role_repo.save(role)

            if self._event_bus is not None:
                await self._event_bus.publish(role.pull_events())

            state = "activated" if request.is_active else "deactivated"
            logger.info("Role %s %s", saved.slug.value, state)
            return Result.ok(
                ChangeRoleStatusResponse(role=saved, message=f"Role {state} successfully"),
            )
        except Exception as e:
            logger.warning("Failed to change status of role %s: %s", request.role_id, e)
            return Result.from_exception(e, "Failed to change role status")
