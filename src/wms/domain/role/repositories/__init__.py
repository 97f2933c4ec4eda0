from wms.domain.role.repositories.role_repository import (
    DEFAULT_ROLE_SLUG,
    ROLE_SORT_FIELDS,
    RoleRepository,
    RoleSearchCriteria,
    RoleSortOptions,
)

__all__ = [
    "DEFAULT_ROLE_SLUG",
    "ROLE_SORT_FIELDS",
    "RoleRepository",
    "RoleSearchCriteria",
    "RoleSortOptions",
]
