"""Fixtures for application-layer tests: mocked repositories and a bus."""

from unittest.mock import AsyncMock

import pytest

from wms.application.events import InMemoryEventBus
from wms.domain.role import RoleRepository
from wms.domain.user import UserRepository


async def _return_argument(entity):
    return entity


@pytest.fixture
def user_repo() -> AsyncMock:
    """UserRepository mock with nothing stored."""
    repo = AsyncMock(spec=UserRepository)
    repo.find_by_id.return_value = None
    repo.find_by_username_or_email.return_value = None
    repo.find_by_email.return_value = None
    repo.find_by_reset_token.return_value = None
    repo.exists_by_username.return_value = False
    repo.exists_by_email.return_value = False
    repo.get_role_slugs.return_value = []
    repo.save.side_effect = _return_argument
    return repo


@pytest.fixture
def role_repo() -> AsyncMock:
    """RoleRepository mock with nothing stored."""
    repo = AsyncMock(spec=RoleRepository)
    repo.find_by_id.return_value = None
    repo.find_by_name.return_value = None
    repo.find_by_slug.return_value = None
    repo.find_by_ids.return_value = []
    repo.find_default_role.return_value = None
    repo.exists_by_name.return_value = False
    repo.exists_by_slug.return_value = False
    repo.save.side_effect = _return_argument
    return repo


@pytest.fixture
def event_bus() -> tuple[InMemoryEventBus, list]:
    """Bus that records every published event."""
    bus = InMemoryEventBus()
    received: list = []

    async def record(event):
        received.append(event)

    bus.subscribe("*", record)
    return bus, received
