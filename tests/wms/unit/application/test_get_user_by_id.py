"""Unit tests for GetUserByIdUseCase."""

import pytest

from wms.application.result import ErrorKind
from wms.application.use_cases.user import GetUserByIdRequest, GetUserByIdUseCase
from tests.shared.fixtures.factories import TestUserFactory


class TestGetUserById:
    """Test single-user lookup."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("user_id", "message"),
        [
            (None, "User ID is required"),
            ("", "User ID is required"),
            ("not-a-uuid", "Invalid user ID format"),
        ],
    )
    async def test_rejects_bad_ids(self, user_repo, user_id, message):
        """Missing or malformed ids never reach the repository."""
        result = await GetUserByIdUseCase(user_repo).execute(GetUserByIdRequest(user_id))

        assert result.error == message
        assert result.error_kind == ErrorKind.VALIDATION
        user_repo.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_not_found(self, user_repo):
        """Unknown ids are reported as not found."""
        result = await GetUserByIdUseCase(user_repo).execute(
            GetUserByIdRequest(str(TestUserFactory.BOB_ID)),
        )
        assert result.error == "User not found"
        assert result.error_kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_found_without_roles(self, user_repo):
        """Roles are only loaded on request."""
        user = TestUserFactory.alice()
        user_repo.find_by_id.return_value = user

        result = await GetUserByIdUseCase(user_repo).execute(GetUserByIdRequest(str(user.id)))

        response = result.get_value()
        assert response.user is user
        assert response.roles is None
        assert response.message == "User retrieved successfully"
        user_repo.get_role_slugs.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_found_with_roles(self, user_repo):
        """include_roles adds the role slugs."""
        user = TestUserFactory.alice()
        user_repo.find_by_id.return_value = user
        user_repo.get_role_slugs.return_value = ["manager", "viewer"]

        result = await GetUserByIdUseCase(user_repo).execute(
            GetUserByIdRequest(str(user.id), include_roles=True),
        )

        assert result.get_value().roles == ["manager", "viewer"]
