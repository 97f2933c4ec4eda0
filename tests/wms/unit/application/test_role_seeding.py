"""Unit tests for built-in role seeding."""

import pytest

from wms.application.services.role_seeding import BUILT_IN_ROLES, find_role, seed_roles
from wms.domain.role import DEFAULT_ROLE_SLUG


class TestSeedRoles:
    """Tests for seed_roles."""

    @pytest.mark.asyncio
    async def test_creates_all_missing_roles(self, role_repo):
        created = await seed_roles(role_repo)

        assert [role.slug.value for role in created] == [d.slug for d in BUILT_IN_ROLES]
        system = {role.slug.value for role in created if role.is_system_role}
        assert system == {"super-admin", "admin"}
        assert DEFAULT_ROLE_SLUG in {role.slug.value for role in created}

    @pytest.mark.asyncio
    async def test_skips_existing_roles(self, role_repo):
        """Running the seed twice creates nothing the second time."""
        role_repo.exists_by_slug.return_value = True

        created = await seed_roles(role_repo)

        assert created == []
        role_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_find_role_accepts_reserved_slug(self, role_repo):
        await find_role(role_repo, "admin")

        slug = role_repo.find_by_slug.await_args.args[0]
        assert slug.value == "admin"
