"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wms.domain.user import Password
from wms.presentation.api.dependencies import create_tables, get_engine
from wms.presentation.api.exception_handlers import setup_exception_handlers
from wms.presentation.api.routers import auth_router, roles_router, users_router
from wms.presentation.api.schemas.common import Envelope, HealthResponse
from wms_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Console output with timestamps and module names, the wms level taken
    from settings, and WARNING for noisy third-party libraries.
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger("wms").setLevel(log_level)
    logging.getLogger("wms_auth").setLevel(log_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Login, token refresh and password reset.

**Tokens:**
- Access tokens (Bearer) authenticate every other endpoint
- Refresh tokens are exchanged at `/auth/refresh` for a new pair
""",
    },
    {
        "name": "Users",
        "description": """User accounts and their profiles.

**Listing:**
- `page` / `limit` (max 100), `search`, `isActive`, `isEmailVerified`,
  `roleId`, `createdAfter`, `createdBefore`, `sortBy`, `sortOrder`

**Deletion:**
- Soft delete by default, `?permanent=true` removes the row
- Soft-deleted users can be restored
""",
    },
    {
        "name": "Roles",
        "description": """Roles assigned to users.

System roles (`super-admin`, `admin`) cannot be modified,
deactivated or deleted.
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]

ERROR_RESPONSES: dict = {
    401: {"model": Envelope, "description": "Not authenticated"},
    403: {"model": Envelope, "description": "Insufficient role"},
    422: {"model": Envelope, "description": "Request validation failed"},
}


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting WMS API v%s...", API_VERSION)
    engine = get_engine()
    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None
    yield

    logger.info("Shutting down WMS API...")
    await engine.dispose()
    logger.info("Database connections closed")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter(responses=ERROR_RESPONSES)

    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(users_router, prefix="/users", tags=["Users"])
    v1_router.include_router(roles_router, prefix="/roles", tags=["Roles"])

    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    _configure_logging()

    if settings is None:
        settings = get_settings()

    Password.set_default_rounds(settings.password_bcrypt_rounds)
    app_name = settings.app_name

    app = FastAPI(
        title=f"{app_name} API",
        description="Warehouse management backend: users, roles and authentication.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"], response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Unversioned health check for load balancers and monitoring."""
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            api_versions=["v1"],
        )

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "auth": f"{API_V1_PREFIX}/auth",
                "users": f"{API_V1_PREFIX}/users",
                "roles": f"{API_V1_PREFIX}/roles",
            },
        }

    return app


# Application instance for uvicorn
app = create_app()
