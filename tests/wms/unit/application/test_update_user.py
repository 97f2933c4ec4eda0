"""Unit tests for UpdateUserUseCase."""

import pytest

from wms.application.result import ErrorKind
from wms.application.use_cases.user import UpdateUserRequest, UpdateUserUseCase
from wms.domain.user import UserDeactivatedEvent, UserUpdatedEvent
from tests.shared.fixtures.factories import TestUserFactory


class TestUpdateUser:
    """Test partial updates."""

    def setup_method(self):
        """Set up a stored user."""
        self.user = TestUserFactory.alice()
        self.user_id = str(self.user.id)

    @pytest.mark.asyncio
    async def test_no_fields(self, user_repo):
        """An empty update is rejected without saving."""
        result = await UpdateUserUseCase(user_repo).execute(
            UpdateUserRequest(user_id=self.user_id),
        )
        assert result.error == "At least one field must be provided for update"
        user_repo.find_by_id.assert_not_awaited()
        user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_id(self, user_repo):
        """Malformed ids are validation failures."""
        result = await UpdateUserUseCase(user_repo).execute(
            UpdateUserRequest(user_id="abc", first_name="Alicia"),
        )
        assert result.error_kind == ErrorKind.VALIDATION
        assert "Invalid user ID format" in result.error

    @pytest.mark.asyncio
    async def test_not_found(self, user_repo):
        """Unknown users are reported as not found."""
        result = await UpdateUserUseCase(user_repo).execute(
            UpdateUserRequest(user_id=self.user_id, first_name="Alicia"),
        )
        assert result.error == "User not found"
        assert result.error_kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_updates_profile(self, user_repo, event_bus):
        """Profile fields are applied and one event is published."""
        bus, received = event_bus
        user_repo.find_by_id.return_value = self.user

        result = await UpdateUserUseCase(user_repo, bus).execute(
            UpdateUserRequest(user_id=self.user_id, first_name="Alicia", phone="+1 555 0100"),
        )

        user = result.get_value().user
        assert result.get_value().message == "User updated successfully"
        assert user.profile.first_name == "Alicia"
        assert user.profile.last_name == "Doe"
        assert user.profile.phone == "+1 555 0100"
        assert [type(e) for e in received] == [UserUpdatedEvent]

    @pytest.mark.asyncio
    async def test_empty_string_clears_optional_field(self, user_repo):
        """Optional fields are cleared with an empty string."""
        self.user.update_profile(self.user.profile.update(phone="+1 555 0100"))
        user_repo.find_by_id.return_value = self.user

        result = await UpdateUserUseCase(user_repo).execute(
            UpdateUserRequest(user_id=self.user_id, phone=""),
        )

        assert result.get_value().user.profile.phone is None

    @pytest.mark.asyncio
    async def test_empty_name_is_ignored(self, user_repo):
        """Empty required fields count as not provided."""
        user_repo.find_by_id.return_value = self.user

        result = await UpdateUserUseCase(user_repo).execute(
            UpdateUserRequest(user_id=self.user_id, first_name="", is_active=False),
        )

        user = result.get_value().user
        assert user.profile.first_name == "Alice"
        assert not user.is_active

    @pytest.mark.asyncio
    async def test_password_and_status(self, user_repo, event_bus):
        """Password change and deactivation each record an event."""
        bus, received = event_bus
        user_repo.find_by_id.return_value = self.user

        result = await UpdateUserUseCase(user_repo, bus).execute(
            UpdateUserRequest(
                user_id=self.user_id,
                password="N3w!Secret",
                is_active=False,
            ),
        )

        assert result.get_value().user.password.compare("N3w!Secret")
        assert [type(e) for e in received] == [UserUpdatedEvent, UserDeactivatedEvent]

    @pytest.mark.asyncio
    async def test_invalid_profile_value(self, user_repo):
        """Profile rules apply to partial updates."""
        result = await UpdateUserUseCase(user_repo).execute(
            UpdateUserRequest(user_id=self.user_id, language="xx"),
        )
        assert result.error_kind == ErrorKind.VALIDATION
        assert "Unsupported language" in result.error
        user_repo.save.assert_not_awaited()
