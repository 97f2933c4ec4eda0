"""Role use cases."""

from wms.application.use_cases.role.change_role_status import (
    ChangeRoleStatusRequest,
    ChangeRoleStatusResponse,
    ChangeRoleStatusUseCase,
)
from wms.application.use_cases.role.create_role import (
    CreateRoleRequest,
    CreateRoleResponse,
    CreateRoleUseCase,
)
from wms.application.use_cases.role.delete_role import (
    DeleteRoleRequest,
    DeleteRoleResponse,
    DeleteRoleUseCase,
)
from wms.application.use_cases.role.get_role_by_id import (
    GetRoleByIdRequest,
    GetRoleByIdResponse,
    GetRoleByIdUseCase,
)
from wms.application.use_cases.role.get_roles_with_pagination import (
    GetRolesWithPaginationRequest,
    GetRolesWithPaginationResponse,
    GetRolesWithPaginationUseCase,
)
from wms.application.use_cases.role.update_role import (
    UpdateRoleRequest,
    UpdateRoleResponse,
    UpdateRoleUseCase,
)

__all__ = [
    "ChangeRoleStatusRequest",
    "ChangeRoleStatusResponse",
    "ChangeRoleStatusUseCase",
    "CreateRoleRequest",
    "CreateRoleResponse",
    "CreateRoleUseCase",
    "DeleteRoleRequest",
    "DeleteRoleResponse",
    "DeleteRoleUseCase",
    "GetRoleByIdRequest",
    "GetRoleByIdResponse",
    "GetRoleByIdUseCase",
    "GetRolesWithPaginationRequest",
    "GetRolesWithPaginationResponse",
    "GetRolesWithPaginationUseCase",
    "UpdateRoleRequest",
    "UpdateRoleResponse",
    "UpdateRoleUseCase",
]
