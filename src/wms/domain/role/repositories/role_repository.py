"""Role repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from wms.domain.role.aggregates.role import Role
from wms.domain.role.value_objects import RoleName, RoleSlug
from wms.domain.shared.entity_id import EntityId
from wms.domain.shared.pagination import (
    PaginatedResult,
    PaginationParams,
    SortDirection,
    SortOptions,
)

ROLE_SORT_FIELDS = ("name", "slug", "created_at", "updated_at")
DEFAULT_ROLE_SLUG = "viewer"


@dataclass(frozen=True)
class RoleSearchCriteria:
    search: Optional[str] = None
    is_active: Optional[bool] = None
    is_system_role: Optional[bool] = None
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None


@dataclass(frozen=True)
class RoleSortOptions(SortOptions):
    field: str = "name"
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        if self.field not in ROLE_SORT_FIELDS:
            msg = f"Unsupported role sort field: {self.field}"
            raise ValueError(msg)


class RoleRepository(ABC):
    """Repository interface for Role aggregates."""

    @abstractmethod
    async def find_by_id(self, role_id: EntityId) -> Optional[Role]:
        """Find a non-deleted role by id."""

    @abstractmethod
    async def find_by_ids(self, role_ids: Sequence[EntityId]) -> list[Role]:
        """Find the non-deleted roles among ``role_ids``."""

    @abstractmethod
    async def find_by_name(self, name: RoleName) -> Optional[Role]:
        """Find a role by normalized name."""

    @abstractmethod
    async def find_by_slug(self, slug: RoleSlug) -> Optional[Role]:
        """Find a role by slug."""

    @abstractmethod
    async def exists_by_name(self, name: RoleName) -> bool:
        """Check whether a role name is taken."""

    @abstractmethod
    async def exists_by_slug(self, slug: RoleSlug) -> bool:
        """Check whether a role slug is taken."""

    @abstractmethod
    async def find_with_pagination(
        self,
        criteria: RoleSearchCriteria,
        pagination: PaginationParams,
        sort: Optional[RoleSortOptions] = None,
    ) -> PaginatedResult[Role]:
        """Return one page of roles matching ``criteria``."""

    @abstractmethod
    async def find_active(self) -> list[Role]:
        """All active, non-deleted roles."""

    @abstractmethod
    async def find_system_roles(self) -> list[Role]:
        """Roles flagged as system roles."""

    @abstractmethod
    async def find_default_role(self) -> Optional[Role]:
        """The role new users receive when none is given."""

    @abstractmethod
    async def find_by_user_id(self, user_id: EntityId) -> list[Role]:
        """Roles assigned to a user."""

    @abstractmethod
    async def save(self, role: Role) -> Role:
        """
        Insert or update a role.

        Raises
        ------
        RoleAlreadyExistsError
            If the name or slug collides with another role
        """

    @abstractmethod
    async def soft_delete(
        self,
        role_ids: Sequence[EntityId],
        deleted_by: Optional[EntityId] = None,
    ) -> int:
        """Mark roles deleted. Returns the number of rows affected."""
