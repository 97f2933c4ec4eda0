"""Role domain: named authority levels assigned to users."""

from wms.domain.role.aggregates import ROLE_HIERARCHY, Role
from wms.domain.role.events import RoleCreatedEvent, RoleUpdatedEvent
from wms.domain.role.exceptions import (
    InactiveRoleError,
    InvalidRoleNameError,
    InvalidRoleSlugError,
    RoleAlreadyExistsError,
    RoleNotFoundError,
    SystemRoleProtectedError,
)
from wms.domain.role.repositories import (
    DEFAULT_ROLE_SLUG,
    ROLE_SORT_FIELDS,
    RoleRepository,
    RoleSearchCriteria,
    RoleSortOptions,
)
from wms.domain.role.value_objects import RoleName, RoleSlug

__all__ = [
    "ROLE_HIERARCHY",
    "Role",
    "RoleName",
    "RoleSlug",
    "RoleCreatedEvent",
    "RoleUpdatedEvent",
    "DEFAULT_ROLE_SLUG",
    "ROLE_SORT_FIELDS",
    "RoleRepository",
    "RoleSearchCriteria",
    "RoleSortOptions",
    "InactiveRoleError",
    "InvalidRoleNameError",
    "InvalidRoleSlugError",
    "RoleAlreadyExistsError",
    "RoleNotFoundError",
    "SystemRoleProtectedError",
]
