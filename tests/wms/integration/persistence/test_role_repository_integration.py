"""Integration tests for RoleRepositorySQLAlchemy."""

import pytest
from sqlalchemy import update

from wms.application.services.role_seeding import seed_roles
from wms.domain.role import RoleAlreadyExistsError, RoleName, RoleSearchCriteria, RoleSlug
from wms.domain.shared import PaginationParams
from wms.infrastructure.persistence.sqlalchemy.models import RoleModel
from tests.shared.fixtures.factories import TestRoleFactory, TestUserFactory

pytestmark = pytest.mark.integration


class TestRolePersistence:
    """Round trips through the roles table."""

    @pytest.mark.asyncio
    async def test_save_and_find(self, role_repository):
        manager = TestRoleFactory.manager()
        await role_repository.save(manager)

        by_id = await role_repository.find_by_id(manager.id)
        by_slug = await role_repository.find_by_slug(RoleSlug("manager"))
        by_name = await role_repository.find_by_name(RoleName("manager"))

        assert by_id == manager == by_slug == by_name
        assert by_id.description == "Manages warehouse operations"
        assert await role_repository.exists_by_name(RoleName("Manager"))
        assert await role_repository.exists_by_slug(RoleSlug("manager"))

    @pytest.mark.asyncio
    async def test_reserved_slug_round_trip(self, role_repository):
        """System roles keep their reserved slugs when loaded."""
        admin = TestRoleFactory.admin()
        await role_repository.save(admin)

        stored = await role_repository.find_by_id(admin.id)

        assert stored.slug.value == "admin"
        assert stored.is_system_role

    @pytest.mark.asyncio
    async def test_duplicate_slug(self, role_repository):
        await role_repository.save(TestRoleFactory.manager())

        with pytest.raises(RoleAlreadyExistsError) as exc_info:
            await role_repository.save(TestRoleFactory.create("Shift Manager", "manager"))

        assert exc_info.value.field == "slug"

    @pytest.mark.asyncio
    async def test_update(self, role_repository):
        manager = TestRoleFactory.manager()
        await role_repository.save(manager)

        manager.update(name=RoleName("Floor Manager"), description="Runs the floor")
        await role_repository.save(manager)

        stored = await role_repository.find_by_id(manager.id)
        assert stored.name.value == "Floor Manager"
        assert stored.slug.value == "manager"

    @pytest.mark.asyncio
    async def test_find_by_ids_skips_unknown(self, role_repository):
        manager, viewer = TestRoleFactory.manager(), TestRoleFactory.viewer()
        await role_repository.save(manager)

        found = await role_repository.find_by_ids([manager.id, viewer.id])

        assert found == [manager]
        assert await role_repository.find_by_ids([]) == []


class TestRoleQueries:
    """Listing and special finders."""

    @pytest.mark.asyncio
    async def test_seeded_roles(self, role_repository):
        """Seeding twice leaves exactly the built-in roles."""
        first = await seed_roles(role_repository)
        second = await seed_roles(role_repository)

        assert len(first) == 6
        assert second == []
        system = await role_repository.find_system_roles()
        assert {role.slug.value for role in system} == {"admin", "super-admin"}
        default = await role_repository.find_default_role()
        assert default.slug.value == "viewer"

    @pytest.mark.asyncio
    async def test_pagination_and_filters(self, role_repository):
        await seed_roles(role_repository)

        page = await role_repository.find_with_pagination(
            RoleSearchCriteria(is_system_role=False),
            PaginationParams(limit=3),
        )

        assert [role.name.value for role in page.data] == ["Employee", "Manager", "Supervisor"]
        assert page.pagination.total == 4
        assert page.pagination.has_next_page

    @pytest.mark.asyncio
    async def test_search(self, role_repository):
        await seed_roles(role_repository)

        page = await role_repository.find_with_pagination(
            RoleSearchCriteria(search="read-only"),
            PaginationParams(),
        )

        assert [role.slug.value for role in page.data] == ["viewer"]

    @pytest.mark.asyncio
    async def test_find_active(self, role_repository):
        manager, viewer = TestRoleFactory.manager(), TestRoleFactory.viewer()
        viewer.deactivate()
        await role_repository.save(manager)
        await role_repository.save(viewer)

        assert await role_repository.find_active() == [manager]

    @pytest.mark.asyncio
    async def test_find_by_user_id(self, role_repository, user_repository):
        manager, viewer = TestRoleFactory.manager(), TestRoleFactory.viewer()
        alice = TestUserFactory.alice()
        for role in (manager, viewer):
            await role_repository.save(role)
        await user_repository.save(alice)
        await user_repository.assign_roles(alice.id, [viewer.id, manager.id])

        roles = await role_repository.find_by_user_id(alice.id)

        assert [role.slug.value for role in roles] == ["manager", "viewer"]


class TestRoleDeletion:
    """Soft deletion of roles."""

    @pytest.mark.asyncio
    async def test_soft_delete(self, role_repository):
        manager = TestRoleFactory.manager()
        await role_repository.save(manager)

        assert await role_repository.soft_delete([manager.id]) == 1

        assert await role_repository.find_by_id(manager.id) is None
        assert await role_repository.find_by_slug(RoleSlug("manager")) is None

    @pytest.mark.asyncio
    async def test_system_roles_are_never_deleted(self, role_repository):
        admin = TestRoleFactory.admin()
        await role_repository.save(admin)

        assert await role_repository.soft_delete([admin.id]) == 0
        assert await role_repository.find_by_id(admin.id) is not None


@pytest.fixture
async def renamed_role(role_repository, db_session):
    manager = TestRoleFactory.manager()
    await role_repository.save(manager)
    await db_session.execute(
        update(RoleModel)
        .where(RoleModel.id == manager.id.as_uuid())
        .values(name="R&D Lead"),
    )
    await db_session.flush()
    db_session.expunge_all()
    return manager


class TestRoleRowsWrittenUnderOlderRules:
    """Stored role names load without the current naming rules."""

    @pytest.mark.asyncio
    async def test_find_by_id(self, role_repository, renamed_role):
        stored = await role_repository.find_by_id(renamed_role.id)

        assert stored.name.value == "R&D Lead"
        assert stored.slug.value == "manager"

    @pytest.mark.asyncio
    async def test_find_with_pagination(self, role_repository, renamed_role):
        page = await role_repository.find_with_pagination(
            RoleSearchCriteria(),
            PaginationParams(),
        )

        assert [role.name.value for role in page.data] == ["R&D Lead"]
