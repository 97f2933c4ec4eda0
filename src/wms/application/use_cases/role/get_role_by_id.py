"""Fetch a single role."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from wms.application.result import ErrorKind, Result
from wms.application.use_cases._validation import validate_entity_id
from wms.domain.role import Role, RoleRepository
from wms.domain.shared import EntityId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetRoleByIdRequest:
    role_id: Optional[str]


@dataclass(frozen=True)
class GetRoleByIdResponse:
    role: Role
    message: str


class GetRoleByIdUseCase:
    def __init__(self, role_repository: RoleRepository):
        self._role_repo = role_repository

    async def execute(self, request: GetRoleByIdRequest) -> Result[GetRoleByIdResponse]:
        try:
            errors = validate_entity_id(request.role_id, "Role ID")
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            role = await self._role_repo.find_by_id(
                EntityId.from_string(request.role_id),  # type: ignore[arg-type]
            )
            if role is None:
                return Result.fail("Role not found", ErrorKind.NOT_FOUND)

            return Result.ok(
                GetRoleByIdResponse(role=role, message="Role retrieved successfully"),
            )
        except Exception as e:
            logger.warning("Failed to retrieve role %s: %s", request.role_id, e)
            return Result.from_exception(e, "Failed to retrieve role")
