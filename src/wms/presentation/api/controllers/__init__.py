from wms.presentation.api.controllers.base_controller import (
    BaseController,
    async_handler,
    build_envelope,
    classify_exception,
    envelope_response,
)
from wms.presentation.api.controllers.role_controller import RoleController
from wms.presentation.api.controllers.user_controller import UserController

__all__ = [
    "BaseController",
    "RoleController",
    "UserController",
    "async_handler",
    "build_envelope",
    "classify_exception",
    "envelope_response",
]
