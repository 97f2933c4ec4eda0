"""User repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from wms.domain.shared.entity_id import EntityId
from wms.domain.shared.pagination import (
    PaginatedResult,
    PaginationParams,
    SortDirection,
    SortOptions,
)
from wms.domain.user.aggregates.user import User
from wms.domain.user.value_objects import Email, Username

USER_SORT_FIELDS = (
    "username",
    "email",
    "first_name",
    "last_name",
    "created_at",
    "updated_at",
    "last_login_at",
)


@dataclass(frozen=True)
class UserSearchCriteria:
    """Filters for paginated user listings. ``None`` means no filter."""

    search: Optional[str] = None
    is_active: Optional[bool] = None
    is_email_verified: Optional[bool] = None
    role_id: Optional[EntityId] = None
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None
    include_deleted: bool = False


@dataclass(frozen=True)
class UserSortOptions(SortOptions):
    field: str = "created_at"
    direction: SortDirection = SortDirection.DESC

    def __post_init__(self) -> None:
        if self.field not in USER_SORT_FIELDS:
            msg = f"Unsupported user sort field: {self.field}"
            raise ValueError(msg)


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Soft-deleted users are invisible to every finder unless stated
    otherwise.
    """

    @abstractmethod
    async def find_by_id(
        self,
        user_id: EntityId,
        include_deleted: bool = False,
    ) -> Optional[User]:
        """Find a user by id."""

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by exact username."""

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by normalized email."""

    @abstractmethod
    async def find_by_username_or_email(self, identifier: str) -> Optional[User]:
        """
        Find a user whose username or email matches ``identifier``.

        Email comparison is case-insensitive; username comparison is exact.
        """

    @abstractmethod
    async def find_by_reset_token(self, token: str) -> Optional[User]:
        """Find the user holding a password reset token."""

    @abstractmethod
    async def exists_by_username(self, username: Username) -> bool:
        """Check whether a username is taken (deleted users included)."""

    @abstractmethod
    async def exists_by_email(self, email: Email) -> bool:
        """Check whether an email is taken (deleted users included)."""

    @abstractmethod
    async def find_with_pagination(
        self,
        criteria: UserSearchCriteria,
        pagination: PaginationParams,
        sort: Optional[UserSortOptions] = None,
    ) -> PaginatedResult[User]:
        """
        Return one page of users matching ``criteria``.

        Parameters
        ----------
        criteria
            Filters; ``search`` matches username, email, first or last name
        pagination
            Page and limit; offset is derived
        sort
            Sort field and direction, defaults to newest first

        Returns
        -------
        PaginatedResult with the page and total counts
        """

    @abstractmethod
    async def find_by_role(self, role_id: EntityId) -> list[User]:
        """Users assigned the given role."""

    @abstractmethod
    async def find_by_roles(self, role_ids: Sequence[EntityId]) -> list[User]:
        """Users assigned any of the given roles."""

    @abstractmethod
    async def find_active(self) -> list[User]:
        """All active, non-deleted users."""

    @abstractmethod
    async def count_active(self) -> int:
        """Number of active, non-deleted users."""

    @abstractmethod
    async def save(self, user: User) -> User:
        """
        Insert or update a user.

        Raises
        ------
        UsernameAlreadyExistsError, EmailAlreadyExistsError
            If a unique column collides with another user
        """

    @abstractmethod
    async def soft_delete(
        self,
        user_ids: Sequence[EntityId],
        deleted_by: Optional[EntityId] = None,
    ) -> int:
        """Mark users deleted. Returns the number of rows affected."""

    @abstractmethod
    async def restore(
        self,
        user_ids: Sequence[EntityId],
        restored_by: Optional[EntityId] = None,
    ) -> int:
        """Undo a soft delete. Returns the number of rows affected."""

    @abstractmethod
    async def permanently_delete(self, user_ids: Sequence[EntityId]) -> int:
        """Remove users and their role assignments for good."""

    @abstractmethod
    async def assign_roles(
        self,
        user_id: EntityId,
        role_ids: Sequence[EntityId],
    ) -> None:
        """Replace the user's role assignments."""

    @abstractmethod
    async def get_role_slugs(self, user_id: EntityId) -> list[str]:
        """Slugs of the active roles assigned to a user."""
