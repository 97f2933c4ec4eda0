"""Fixtures for repository tests against an in-memory SQLite database."""

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from wms.infrastructure.persistence.sqlalchemy.models import Base
from wms.infrastructure.persistence.sqlalchemy.repositories import (
    RoleRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)


@pytest.fixture
async def integration_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh database engine for each test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(integration_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(
        integration_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_maker() as session:
        yield session


@pytest.fixture
def user_repository(db_session) -> UserRepositorySQLAlchemy:
    return UserRepositorySQLAlchemy(db_session)


@pytest.fixture
def role_repository(db_session) -> RoleRepositorySQLAlchemy:
    return RoleRepositorySQLAlchemy(db_session)
