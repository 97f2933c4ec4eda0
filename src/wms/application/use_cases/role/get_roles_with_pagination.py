"""Paginated role listing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from wms.application.result import ErrorKind, Result
from wms.domain.role import (
    ROLE_SORT_FIELDS,
    Role,
    RoleRepository,
    RoleSearchCriteria,
    RoleSortOptions,
)
from wms.domain.shared import (
    MAX_PAGE_SIZE,
    PaginatedResult,
    PaginationParams,
    SortDirection,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetRolesWithPaginationRequest:
    page: Optional[int] = None
    limit: Optional[int] = None
    search: Optional[str] = None
    is_active: Optional[bool] = None
    is_system_role: Optional[bool] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None


@dataclass(frozen=True)
class GetRolesWithPaginationResponse:
    result: PaginatedResult[Role]
    message: str


class GetRolesWithPaginationUseCase:
    """List roles page by page, sorted by name unless asked otherwise."""

    def __init__(self, role_repository: RoleRepository):
        self._role_repo = role_repository

    async def execute(
        self,
        request: GetRolesWithPaginationRequest,
    ) -> Result[GetRolesWithPaginationResponse]:
        try:
            errors: list[str] = []
            if request.page is not None and request.page < 1:
                errors.append("Page number must be greater than 0")
            if request.limit is not None and not 1 <= request.limit <= MAX_PAGE_SIZE:
                errors.append(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
            if request.sort_by and request.sort_by not in ROLE_SORT_FIELDS:
                errors.append(f"Sort field must be one of: {', '.join(ROLE_SORT_FIELDS)}")
            if request.sort_order and request.sort_order not in ("asc", "desc"):
                errors.append('Sort order must be either "asc" or "desc"')
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            search = request.search.strip() if request.search else None
            criteria = RoleSearchCriteria(
                search=search or None,
                is_active=request.is_active,
                is_system_role=request.is_system_role,
            )
            sort = RoleSortOptions(
                field=request.sort_by or "name",
                direction=SortDirection(request.sort_order or SortDirection.ASC.value),
            )
            result = await self._role_repo.find_with_pagination(
                criteria,
                PaginationParams.create(request.page, request.limit),
                sort,
            )

            return Result.ok(
                GetRolesWithPaginationResponse(
                    result=result,
                    message=f"Retrieved {len(result.data)} roles successfully",
                ),
            )
        except Exception as e:
            logger.warning("Failed to retrieve roles: %s", e)
            return Result.from_exception(e, "Failed to retrieve roles")
