"""FastAPI dependency injection for the WMS API.

Provides dependencies for:
- Database engine and request-scoped sessions
- Repositories, controllers and the event bus
- Authentication (current user from JWT) and role guards
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator, Callable

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from wms.application.context import UserContext
from wms.application.context.user_context import ADMIN_ROLE_SLUGS
from wms.application.events import InMemoryEventBus, create_default_event_bus
from wms.application.services import AuthenticationService
from wms.domain.shared import EntityId
from wms.infrastructure.persistence.sqlalchemy.models import Base
from wms.infrastructure.persistence.sqlalchemy.repositories import (
    RoleRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from wms.presentation.api.config import get_api_settings
from wms.presentation.api.controllers import RoleController, UserController
from wms_auth import ACCESS_TOKEN, InvalidTokenError, JWTService
from wms_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)


@lru_cache()
def get_database_url() -> str:
    url = get_settings().database_url

    # Ensure data directory exists for file-based SQLite
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    One session per request from the shared engine/pool. Routers commit
    explicitly once a write succeeded and roll back otherwise.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def finish_transaction(session: AsyncSession, response: Response) -> Response:
    """Commit when the response reports success, roll back otherwise."""
    if response.status_code < status.HTTP_400_BAD_REQUEST:
        await session.commit()
    else:
        await session.rollback()
    return response


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create all database tables (idempotent)."""
    engine = engine or get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date")


# -----------------------------------------------------------------------------
# Repositories, Event Bus & Controllers
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_event_bus() -> InMemoryEventBus:
    """Process-wide event bus with the logging handler subscribed."""
    return create_default_event_bus()


EventBus = Annotated[InMemoryEventBus, Depends(get_event_bus)]


def get_user_repository(session: DBSession) -> UserRepositorySQLAlchemy:
    return UserRepositorySQLAlchemy(session)


def get_role_repository(session: DBSession) -> RoleRepositorySQLAlchemy:
    return RoleRepositorySQLAlchemy(session)


UserRepo = Annotated[UserRepositorySQLAlchemy, Depends(get_user_repository)]
RoleRepo = Annotated[RoleRepositorySQLAlchemy, Depends(get_role_repository)]


def get_user_controller(
    request: Request,
    user_repo: UserRepo,
    role_repo: RoleRepo,
    event_bus: EventBus,
) -> UserController:
    return UserController(request, user_repo, role_repo, event_bus)


def get_role_controller(
    request: Request,
    role_repo: RoleRepo,
    event_bus: EventBus,
) -> RoleController:
    return RoleController(request, role_repo, event_bus)


UserControllerDep = Annotated[UserController, Depends(get_user_controller)]
RoleControllerDep = Annotated[RoleController, Depends(get_role_controller)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(
    settings: Settings = Depends(get_api_settings),
) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
        refresh_token_expire_days=settings.jwt_refresh_token_expire_days,
    )


def get_authentication_service(
    user_repo: UserRepo,
    event_bus: EventBus,
    jwt_service: JWTService = Depends(get_jwt_service),
    settings: Settings = Depends(get_api_settings),
) -> AuthenticationService:
    return AuthenticationService(
        user_repository=user_repo,
        jwt_service=jwt_service,
        event_bus=event_bus,
        reset_token_expire_minutes=settings.password_reset_token_expire_minutes,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Current User (JWT Authentication)
# -----------------------------------------------------------------------------


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    user_repo: UserRepo,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> UserContext:
    """
    Resolve the authenticated user from the bearer token.

    Roles are re-read from the database so that revoked roles take
    effect before the token expires.

    Raises
    ------
    HTTPException
        401 if the token is missing, invalid, not an access token, or the
        user no longer exists or is inactive
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        payload = jwt_service.verify_token(
            credentials.credentials,
            expected_type=ACCESS_TOKEN,
        )
    except InvalidTokenError as e:
        logger.warning("Invalid token: %s", e)
        raise _unauthorized("Invalid or expired token") from e

    if not EntityId.is_valid(payload.user_id):
        raise _unauthorized("Invalid or expired token")

    user = await user_repo.find_by_id(EntityId.from_string(payload.user_id))
    if user is None or not user.is_active:
        logger.warning("Token for unknown or inactive user: %s", payload.user_id)
        raise _unauthorized("User not found or inactive")

    role_slugs = await user_repo.get_role_slugs(user.id)
    return UserContext.create(user, role_slugs)


# Type alias for injected current user
CurrentUser = Annotated[UserContext, Depends(get_current_user)]


def require_roles(*slugs: str) -> Callable[[UserContext], UserContext]:
    """Build a dependency that admits users holding any of ``slugs``."""
    allowed = frozenset(slugs)

    def guard(user: CurrentUser) -> UserContext:
        if not user.has_any_role(*allowed):
            logger.warning("User %s lacks roles %s", user.username, sorted(allowed))
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden: insufficient role",
            )
        return user

    return guard


# Type alias for admin user
AdminUser = Annotated[UserContext, Depends(require_roles(*ADMIN_ROLE_SLUGS))]
