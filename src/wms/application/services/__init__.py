from wms.application.services.authentication_service import AuthenticationService
from wms.application.services.role_seeding import (
    BUILT_IN_ROLES,
    RoleDefinition,
    find_role,
    seed_roles,
)

__all__ = [
    "BUILT_IN_ROLES",
    "AuthenticationService",
    "RoleDefinition",
    "find_role",
    "seed_roles",
]
