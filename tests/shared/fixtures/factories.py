"""
Test data factories for creating deterministic test entities.

Usage:
    from tests.shared.fixtures.factories import TestUserFactory, TestRoleFactory

    def test_something():
        user = TestUserFactory.alice()
        role = TestRoleFactory.manager()
"""

from dataclasses import dataclass
from typing import Optional

from wms.application.context import UserContext
from wms.domain.role import Role, RoleName, RoleSlug
from wms.domain.shared import EntityId
from wms.domain.user import Email, Password, User, UserProfile, Username

STRONG_PASSWORD = "Str0ng!Pass"  # NOQA: S105

# Users seeded into the API test database
SEED_ADMIN_USERNAME = "warehouse.chief"
SEED_VIEWER_USERNAME = "viewer01"


@dataclass(frozen=True)
class TestUserFactory:
    """Factory for users with deterministic ids and credentials."""

    __test__ = False

    ALICE_ID = EntityId("aaaaaaaa-aaaa-4aaa-8aaa-aaaaaaaaaaaa")
    BOB_ID = EntityId("bbbbbbbb-bbbb-4bbb-8bbb-bbbbbbbbbbbb")
    ADMIN_ID = EntityId("00000000-0000-4000-8000-000000000001")

    @classmethod
    def create(
        cls,
        username: str = "alice01",
        email: str = "alice@example.com",
        first_name: str = "Alice",
        last_name: str = "Doe",
        password: str = STRONG_PASSWORD,
        created_by: Optional[EntityId] = None,
    ) -> User:
        """A freshly created user (carries a pending UserCreated event)."""
        return User.create(
            Username(username),
            Email(email),
            UserProfile(first_name=first_name, last_name=last_name),
            Password.create(password),
            created_by=created_by,
        )

    @classmethod
    def alice(cls) -> User:
        user = cls.create()
        user.clear_events()
        return user

    @classmethod
    def bob(cls) -> User:
        user = cls.create(
            username="bob.builder",
            email="bob@example.com",
            first_name="Bob",
            last_name="Builder",
        )
        user.clear_events()
        return user

    @classmethod
    def context(cls, user: User, *role_slugs: str) -> UserContext:
        return UserContext.create(user, list(role_slugs))

    @classmethod
    def admin_context(cls) -> UserContext:
        return UserContext(
            user_id=cls.ADMIN_ID,
            username="site.admin",
            email="site.admin@example.com",
            role_slugs=frozenset({"super-admin"}),
        )


@dataclass(frozen=True)
class TestRoleFactory:
    """Factory for roles, system roles included."""

    __test__ = False

    @classmethod
    def create(
        cls,
        name: str = "Manager",
        slug: Optional[str] = None,
        description: Optional[str] = None,
        is_system_role: bool = False,
    ) -> Role:
        role_slug = RoleSlug.from_persistence(slug) if slug else RoleSlug.from_name(name)
        role = Role.create(
            RoleName(name),
            role_slug,
            description=description,
            is_system_role=is_system_role,
        )
        role.clear_events()
        return role

    @classmethod
    def manager(cls) -> Role:
        return cls.create("Manager", "manager", "Manages warehouse operations")

    @classmethod
    def viewer(cls) -> Role:
        return cls.create("Viewer", "viewer", "Read-only access")

    @classmethod
    def admin(cls) -> Role:
        return cls.create("Admin", "admin", "Manages users and roles", is_system_role=True)
