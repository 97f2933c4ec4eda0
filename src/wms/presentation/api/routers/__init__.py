"""API routers."""

from wms.presentation.api.routers.auth import router as auth_router
from wms.presentation.api.routers.roles import router as roles_router
from wms.presentation.api.routers.users import router as users_router

__all__ = [
    "auth_router",
    "roles_router",
    "users_router",
]
