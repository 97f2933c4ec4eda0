"""Pydantic schemas for API request/response models."""

from wms.presentation.api.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    RefreshRequest,
    ResetPasswordRequest,
    TokenResponse,
)
from wms.presentation.api.schemas.common import Envelope, HealthResponse, ResponseMeta
from wms.presentation.api.schemas.roles import CreateRoleBody, UpdateRoleBody
from wms.presentation.api.schemas.users import (
    AssignRolesBody,
    CreateUserBody,
    UpdateUserBody,
)

__all__ = [
    "AssignRolesBody",
    "CreateRoleBody",
    "CreateUserBody",
    "Envelope",
    "ForgotPasswordRequest",
    "HealthResponse",
    "LoginRequest",
    "RefreshRequest",
    "ResetPasswordRequest",
    "ResponseMeta",
    "TokenResponse",
    "UpdateRoleBody",
    "UpdateUserBody",
]
