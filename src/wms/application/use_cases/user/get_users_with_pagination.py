"""Paginated, filterable user listing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from wms.application.result import ErrorKind, Result
from wms.domain.shared import (
    MAX_PAGE_SIZE,
    EntityId,
    PaginatedResult,
    PaginationParams,
    SortDirection,
    ensure_tz_aware,
    utc_now,
)
from wms.domain.user import (
    USER_SORT_FIELDS,
    User,
    UserRepository,
    UserSearchCriteria,
    UserSortOptions,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetUsersWithPaginationRequest:
    page: Optional[int] = None
    limit: Optional[int] = None
    search: Optional[str] = None
    is_active: Optional[bool] = None
    is_email_verified: Optional[bool] = None
    role_id: Optional[str] = None
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None


@dataclass(frozen=True)
class GetUsersWithPaginationResponse:
    result: PaginatedResult[User]
    message: str


class GetUsersWithPaginationUseCase:
    """List users page by page.

    Out-of-range paging and unknown sort fields are rejected before the
    repository is queried.
    """

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(
        self,
        request: GetUsersWithPaginationRequest,
    ) -> Result[GetUsersWithPaginationResponse]:
        try:
            errors = self._validate(request)
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            search = request.search.strip() if request.search else None
            criteria = UserSearchCriteria(
                search=search or None,
                is_active=request.is_active,
                is_email_verified=request.is_email_verified,
                role_id=EntityId.from_string(request.role_id) if request.role_id else None,
                created_after=request.created_after,
                created_before=request.created_before,
            )
            pagination = PaginationParams.create(request.page, request.limit)
            sort = UserSortOptions(
                field=request.sort_by or "created_at",
                direction=SortDirection(request.sort_order or SortDirection.DESC.value),
            )

            result = await self._user_repo.find_with_pagination(criteria, pagination, sort)

            return Result.ok(
                GetUsersWithPaginationResponse(
                    result=result,
                    message=f"Retrieved {len(result.data)} users successfully",
                ),
            )
        except Exception as e:
            logger.warning("Failed to retrieve users: %s", e)
            return Result.from_exception(e, "Failed to retrieve users")

    @staticmethod
    def _validate(request: GetUsersWithPaginationRequest) -> list[str]:
        errors: list[str] = []

        if request.page is not None and request.page < 1:
            errors.append("Page number must be greater than 0")

        if request.limit is not None and not 1 <= request.limit <= MAX_PAGE_SIZE:
            errors.append(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

        if request.sort_by and request.sort_by not in USER_SORT_FIELDS:
            errors.append(f"Sort field must be one of: {', '.join(USER_SORT_FIELDS)}")

        if request.sort_order and request.sort_order not in ("asc", "desc"):
            errors.append('Sort order must be either "asc" or "desc"')

        if request.role_id and not EntityId.is_valid(request.role_id):
            errors.append("Invalid role ID format")

        created_after = ensure_tz_aware(request.created_after)
        created_before = ensure_tz_aware(request.created_before)

        if created_after and created_before and created_after >= created_before:
            errors.append("createdAfter must be before createdBefore")

        if created_after and created_after > utc_now():
            errors.append("createdAfter cannot be in the future")

        return errors
