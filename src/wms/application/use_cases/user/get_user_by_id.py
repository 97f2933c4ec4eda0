"""Fetch a single user."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from wms.application.result import ErrorKind, Result
from wms.application.use_cases._validation import validate_entity_id
from wms.domain.shared import EntityId
from wms.domain.user import User, UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetUserByIdRequest:
    user_id: Optional[str]
    include_roles: bool = False


@dataclass(frozen=True)
class GetUserByIdResponse:
    user: User
    message: str
    roles: Optional[list[str]] = None


class GetUserByIdUseCase:
    """Look a user up by id, optionally with its role slugs."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(self, request: GetUserByIdRequest) -> Result[GetUserByIdResponse]:
        try:
            errors = validate_entity_id(request.user_id, "User ID")
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            user_id = EntityId.from_string(request.user_id)  # type: ignore[arg-type]
            user = await self._user_repo.find_by_id(user_id)
            if user is None:
                return Result.fail("User not found", ErrorKind.NOT_FOUND)

            roles = None
            if request.include_roles:
                roles = await self._user_repo.get_role_slugs(user_id)

            return Result.ok(
                GetUserByIdResponse(
                    user=user,
                    message="User retrieved successfully",
                    roles=roles,
                ),
            )
        except Exception as e:
            logger.warning("Failed to retrieve user %s: %s", request.user_id, e)
            return Result.from_exception(e, "Failed to retrieve user")
