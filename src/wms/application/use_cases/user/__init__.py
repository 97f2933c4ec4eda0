"""User use cases."""

from wms.application.use_cases.user.assign_user_roles import (
    AssignUserRolesRequest,
    AssignUserRolesResponse,
    AssignUserRolesUseCase,
)
from wms.application.use_cases.user.create_user import (
    CreateUserRequest,
    CreateUserResponse,
    CreateUserUseCase,
)
from wms.application.use_cases.user.delete_users import (
    DeleteUsersRequest,
    DeleteUsersResponse,
    DeleteUsersUseCase,
    RestoreUsersRequest,
    RestoreUsersResponse,
    RestoreUsersUseCase,
)
from wms.application.use_cases.user.get_user_by_id import (
    GetUserByIdRequest,
    GetUserByIdResponse,
    GetUserByIdUseCase,
)
from wms.application.use_cases.user.get_users_with_pagination import (
    GetUsersWithPaginationRequest,
    GetUsersWithPaginationResponse,
    GetUsersWithPaginationUseCase,
)
from wms.application.use_cases.user.update_user import (
    UpdateUserRequest,
    UpdateUserResponse,
    UpdateUserUseCase,
)

__all__ = [
    "AssignUserRolesRequest",
    "AssignUserRolesResponse",
    "AssignUserRolesUseCase",
    "CreateUserRequest",
    "CreateUserResponse",
    "CreateUserUseCase",
    "DeleteUsersRequest",
    "DeleteUsersResponse",
    "DeleteUsersUseCase",
    "GetUserByIdRequest",
    "GetUserByIdResponse",
    "GetUserByIdUseCase",
    "GetUsersWithPaginationRequest",
    "GetUsersWithPaginationResponse",
    "GetUsersWithPaginationUseCase",
    "RestoreUsersRequest",
    "RestoreUsersResponse",
    "RestoreUsersUseCase",
    "UpdateUserRequest",
    "UpdateUserResponse",
    "UpdateUserUseCase",
]
