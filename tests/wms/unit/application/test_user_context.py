"""Tests for the request-scoped UserContext."""

from wms.application.context import UserContext
from tests.shared.fixtures.factories import TestUserFactory


class TestUserContext:
    """Test building a context from a user."""

    def test_create_copies_identity(self):
        user = TestUserFactory.alice()

        context = UserContext.create(user, ["viewer"])

        assert context.user_id == user.id
        assert context.username == "alice01"
        assert context.email == "alice@example.com"
        assert context.role_slugs == frozenset({"viewer"})

    def test_admin_roles(self):
        user = TestUserFactory.alice()

        assert UserContext.create(user, ["admin"]).is_admin
        assert not UserContext.create(user, ["manager"]).is_admin
        assert UserContext.create(user, ["manager", "viewer"]).has_any_role("viewer")
