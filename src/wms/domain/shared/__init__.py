"""Shared domain components.

This module exports shared value objects, exceptions, and base classes
used across domain boundaries.
"""

from wms.domain.shared.auditable_entity import AuditableEntity
from wms.domain.shared.entity_id import EntityId
from wms.domain.shared.events import DomainEvent
from wms.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    InfrastructureError,
    ValidationError,
)
from wms.domain.shared.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PaginatedResult,
    PaginationInfo,
    PaginationParams,
    SortDirection,
    SortOptions,
)
from wms.domain.shared.time import ensure_tz_aware, today_utc, utc_now

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "ConflictError",
    "InfrastructureError",
    # Base types
    "AuditableEntity",
    "DomainEvent",
    "EntityId",
    # Pagination
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "PaginatedResult",
    "PaginationInfo",
    "PaginationParams",
    "SortDirection",
    "SortOptions",
    # Utilities
    "ensure_tz_aware",
    "today_utc",
    "utc_now",
]
