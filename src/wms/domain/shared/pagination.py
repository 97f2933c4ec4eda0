"""Pagination primitives shared by repositories and use cases."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PaginationParams:
    """Page/limit pair with the derived row offset."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @classmethod
    def create(cls, page: int | None = None, limit: int | None = None) -> PaginationParams:
        """Apply defaults and cap the page size at ``MAX_PAGE_SIZE``."""
        return cls(
            page=max(page or 1, 1),
            limit=min(limit or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class SortOptions:
    field: str = "created_at"
    direction: SortDirection = SortDirection.DESC


@dataclass(frozen=True)
class PaginationInfo:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> PaginationInfo:
        total_pages = math.ceil(total / limit) if limit > 0 else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
            "has_next_page": self.has_next_page,
            "has_prev_page": self.has_prev_page,
        }


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """One page of items plus pagination metadata."""

    data: list[T]
    pagination: PaginationInfo

    @classmethod
    def create(
        cls,
        data: list[T],
        total: int,
        params: PaginationParams,
    ) -> PaginatedResult[T]:
        return cls(
            data=data,
            pagination=PaginationInfo.build(params.page, params.limit, total),
        )
