"""Soft delete a role."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from wms.application.result import ErrorKind, Result
from wms.application.use_cases._validation import validate_entity_id
from wms.domain.role import RoleRepository
from wms.domain.shared import EntityId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteRoleRequest:
    role_id: Optional[str]
    deleted_by: Optional[str] = None


@dataclass(frozen=True)
class DeleteRoleResponse:
    message: str


class DeleteRoleUseCase:
    """Soft delete a custom role. System roles are refused."""

    def __init__(self, role_repository: RoleRepository):
        self._role_repo = role_repository

    async def execute(self, request: DeleteRoleRequest) -> Result[DeleteRoleResponse]:
        try:
            errors = validate_entity_id(request.role_id, "Role ID")
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            role_id = EntityId.from_string(request.role_id)  # type: ignore[arg-type]
            role = await self._role_repo.find_by_id(role_id)
            if role is None:
                return Result.fail("Role not found", ErrorKind.NOT_FOUND)
            if not role.can_be_deleted():
                return Result.fail(
                    "System roles cannot be deleted",
                    ErrorKind.BUSINESS_RULE,
                )

            deleted_by = (
                EntityId.from_string(request.deleted_by) if request.deleted_by else None
            )
            await self._role_repo.soft_delete([role_id], deleted_by)

            logger.info("Deleted role %s (%s)", role_id, role.slug.value)
            return Result.ok(DeleteRoleResponse(message="Role deleted successfully"))
        except Exception as e:
            logger.warning("Failed to delete role %s: %s", request.role_id, e)
            return Result.from_exception(e, "Failed to delete role")
