"""Replace the set of roles assigned to a user."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from wms.application.result import ErrorKind, Result
from wms.application.use_cases._validation import validate_entity_id
from wms.domain.role import Role, RoleRepository
from wms.domain.shared import EntityId
from wms.domain.user import User, UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignUserRolesRequest:
    user_id: Optional[str]
    role_ids: list[str] = field(default_factory=list)
    assigned_by: Optional[str] = None


@dataclass(frozen=True)
class AssignUserRolesResponse:
    user: User
    roles: list[Role]
    message: str


class AssignUserRolesUseCase:
    """Assign roles to a user, replacing the previous assignment.

    Every role must exist and be active. An empty list removes all roles.
    """

    def __init__(self, user_repository: UserRepository, role_repository: RoleRepository):
        self._user_repo = user_repository
        self._role_repo = role_repository

    async def execute(
        self,
        request: AssignUserRolesRequest,
    ) -> Result[AssignUserRolesResponse]:
        try:
            errors = validate_entity_id(request.user_id, "User ID")
            invalid = [value for value in request.role_ids if not EntityId.is_valid(value)]
            if invalid:
                errors.append(f"Invalid role ID format: {', '.join(invalid)}")
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            user_id = EntityId.from_string(request.user_id)  # type: ignore[arg-type]
            role_ids = list(dict.fromkeys(EntityId.from_string(v) for v in request.role_ids))

            user = await self._user_repo.find_by_id(user_id)
            if user is None:
                return Result.fail("User not found", ErrorKind.NOT_FOUND)

            roles = await self._role_repo.find_by_ids(role_ids) if role_ids else []
            found = {role.id for role in roles}
            missing = [str(role_id) for role_id in role_ids if role_id not in found]
            if missing:
                return Result.fail(
                    f"Roles not found: {', '.join(missing)}",
                    ErrorKind.NOT_FOUND,
                )

            inactive = [role.slug.value for role in roles if not role.is_active]
            if inactive:
                return Result.fail(
                    f"Cannot assign inactive roles: {', '.join(inactive)}",
                    ErrorKind.BUSINESS_RULE,
                )

            await self._user_repo.assign_roles(user_id, role_ids)

            logger.info(
                "Assigned roles %s to user %s",
                [role.slug.value for role in roles],
                user_id,
            )
            return Result.ok(
                AssignUserRolesResponse(
                    user=user,
                    roles=roles,
                    message="User roles updated successfully",
                ),
            )
        except Exception as e:
            logger.warning("Failed to assign roles to user %s: %s", request.user_id, e)
            return Result.from_exception(e, "Failed to assign user roles")
