"""Soft delete, permanent delete and restore of users."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from wms.application.result import ErrorKind, Result
from wms.domain.shared import EntityId
from wms.domain.user import UserRepository

logger = logging.getLogger(__name__)


def _parse_ids(raw_ids: list[str], label: str) -> tuple[list[EntityId], list[str]]:
    errors: list[str] = []
    if not raw_ids:
        errors.append(f"At least one {label} is required")
        return [], errors

    invalid = [value for value in raw_ids if not EntityId.is_valid(value or "")]
    if invalid:
        errors.append(f"Invalid {label} format: {', '.join(map(str, invalid))}")
        return [], errors

    # Keep request order, drop duplicates
    ids = list(dict.fromkeys(EntityId.from_string(value) for value in raw_ids))
    return ids, errors


@dataclass(frozen=True)
class DeleteUsersRequest:
    user_ids: list[str] = field(default_factory=list)
    deleted_by: Optional[str] = None
    permanent: bool = False


@dataclass(frozen=True)
class DeleteUsersResponse:
    affected: int
    message: str


class DeleteUsersUseCase:
    """Delete users, softly by default.

    A soft delete hides the users from every finder and keeps their
    rows; ``permanent=True`` removes them along with their role
    assignments. Users cannot delete themselves.
    """

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(self, request: DeleteUsersRequest) -> Result[DeleteUsersResponse]:
        try:
            user_ids, errors = _parse_ids(request.user_ids, "user ID")
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            deleted_by = (
                EntityId.from_string(request.deleted_by) if request.deleted_by else None
            )
            if deleted_by is not None and deleted_by in user_ids:
                return Result.fail(
                    "Users cannot delete their own account",
                    ErrorKind.BUSINESS_RULE,
                )

            if request.permanent:
                affected = await self._user_repo.permanently_delete(user_ids)
            else:
                affected = await self._user_repo.soft_delete(user_ids, deleted_by)

            if affected == 0:
                return Result.fail("User not found", ErrorKind.NOT_FOUND)

            mode = "permanently deleted" if request.permanent else "deleted"
            logger.info("%s %d user(s)", mode.capitalize(), affected)
            return Result.ok(
                DeleteUsersResponse(
                    affected=affected,
                    message=f"{affected} user(s) {mode} successfully",
                ),
            )
        except Exception as e:
            logger.warning("Failed to delete users: %s", e)
            return Result.from_exception(e, "Failed to delete users")


@dataclass(frozen=True)
class RestoreUsersRequest:
    user_ids: list[str] = field(default_factory=list)
    restored_by: Optional[str] = None


@dataclass(frozen=True)
class RestoreUsersResponse:
    affected: int
    message: str


class RestoreUsersUseCase:
    """Undo a soft delete."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(self, request: RestoreUsersRequest) -> Result[RestoreUsersResponse]:
        try:
            user_ids, errors = _parse_ids(request.user_ids, "user ID")
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            restored_by = (
                EntityId.from_string(request.restored_by) if request.restored_by else None
            )
            affected = await self._user_repo.restore(user_ids, restored_by)
            if affected == 0:
                return Result.fail("No deleted users found", ErrorKind.NOT_FOUND)

            logger.info("Restored %d user(s)", affected)
            return Result.ok(
                RestoreUsersResponse(
                    affected=affected,
                    message=f"{affected} user(s) restored successfully",
                ),
            )
        except Exception as e:
            logger.warning("Failed to restore users: %s", e)
            return Result.from_exception(e, "Failed to restore users")
