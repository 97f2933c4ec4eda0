"""Pytest fixtures for API integration tests.

The database is a SQLite file per test. Tables and seed data are created
before the client starts, and ``NullPool`` keeps connections from being
shared between the fixture's event loop and the client's.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from wms.application.services.role_seeding import find_role, seed_roles
from wms.domain.shared import EntityId
from wms.domain.user import Email, Password, User, UserProfile, Username
from wms.infrastructure.persistence.sqlalchemy.models import Base
from wms.infrastructure.persistence.sqlalchemy.repositories import (
    RoleRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from wms.presentation.api.app import API_V1_PREFIX, create_app
from wms.presentation.api.config import get_api_settings
from wms.presentation.api.dependencies import get_db_session
from wms_config.settings import Settings
from tests.shared.fixtures.factories import (
    SEED_ADMIN_USERNAME,
    SEED_VIEWER_USERNAME,
    STRONG_PASSWORD,
)


async def _create_user(
    users: UserRepositorySQLAlchemy,
    roles: RoleRepositorySQLAlchemy,
    username: str,
    role_slug: str,
) -> User:
    user = User.create(
        Username(username),
        Email(f"{username.replace('.', '-')}@example.com"),
        UserProfile(first_name="Test", last_name=username.title()),
        Password.create(STRONG_PASSWORD),
    )
    await users.save(user)
    role = await find_role(roles, role_slug)
    await users.assign_roles(user.id, [role.id])  # type: ignore[union-attr]
    return user


async def _prepare_database(engine, session_maker) -> dict[str, EntityId]:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_maker() as session:
        users = UserRepositorySQLAlchemy(session)
        roles = RoleRepositorySQLAlchemy(session)
        await seed_roles(roles)
        admin = await _create_user(users, roles, SEED_ADMIN_USERNAME, "super-admin")
        viewer = await _create_user(users, roles, SEED_VIEWER_USERNAME, "viewer")
        await session.commit()
    return {"admin": admin.id, "viewer": viewer.id}


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        postgres_password=SecretStr("test-password"),
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        password_bcrypt_rounds=4,
    )


@pytest.fixture
def test_db_engine(tmp_path):
    """Async engine over a SQLite file in the test's temp directory."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'wms-test.db'}",
        echo=False,
        poolclass=NullPool,
    )
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def test_session_maker(test_db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def seeded_ids(test_db_engine, test_session_maker) -> dict[str, EntityId]:
    """Ids of the seeded super-admin and viewer users."""
    return asyncio.run(_prepare_database(test_db_engine, test_session_maker))


@pytest.fixture
def test_client(api_settings, test_session_maker, seeded_ids) -> TestClient:
    """Create a test client bound to the seeded database."""
    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings

    return TestClient(app)


def _login(client: TestClient, identifier: str) -> dict[str, str]:
    response = client.post(
        f"{API_V1_PREFIX}/auth/login",
        json={"identifier": identifier, "password": STRONG_PASSWORD},
    )
    assert response.status_code == 200, response.text
    token = response.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(test_client) -> dict[str, str]:
    """Authorization header of the seeded super-admin."""
    return _login(test_client, SEED_ADMIN_USERNAME)


@pytest.fixture
def viewer_headers(test_client) -> dict[str, str]:
    """Authorization header of a user holding only the viewer role."""
    return _login(test_client, SEED_VIEWER_USERNAME)


@pytest.fixture
def new_user_data() -> dict:
    return {
        "username": "alice01",
        "email": "  Alice@Example.com ",
        "first_name": "Alice",
        "last_name": "Smith",
        "password": STRONG_PASSWORD,
    }
