"""Unit tests for AuthenticationService."""

import hashlib
from datetime import timedelta

import pytest

from wms.application.services import AuthenticationService
from wms.domain.shared import utc_now
from wms.domain.user import InactiveUserError, InvalidResetTokenError, WeakPasswordError
from wms_auth import InvalidCredentialsError, InvalidTokenError, JWTService
from tests.shared.fixtures.factories import STRONG_PASSWORD, TestUserFactory

NEW_PASSWORD = "An0ther!Secret"  # NOQA: S105


def _hash(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class TestAuthenticationServiceLogin:
    """Tests for login."""

    @pytest.fixture(autouse=True)
    def _service(self, user_repo):
        self.user_repo = user_repo
        self.jwt_service = JWTService(secret_key="test-secret")
        self.service = AuthenticationService(
            user_repository=user_repo,
            jwt_service=self.jwt_service,
        )

    @pytest.mark.asyncio
    async def test_login_returns_tokens_with_roles(self):
        """Test that a valid login issues a token pair carrying role slugs."""
        # Arrange
        user = TestUserFactory.alice()
        self.user_repo.find_by_username_or_email.return_value = user
        self.user_repo.get_role_slugs.return_value = ["manager"]

        # Act
        logged_in, tokens = await self.service.login("alice01", STRONG_PASSWORD)

        # Assert
        assert logged_in.last_login_at is not None
        payload = self.jwt_service.verify_token(tokens.access_token, expected_type="access")
        assert payload.user_id == str(user.id)
        assert payload.roles == ("manager",)
        assert tokens.token_type == "bearer"
        self.user_repo.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_login_wrong_password(self):
        """Test that a wrong password raises InvalidCredentialsError."""
        self.user_repo.find_by_username_or_email.return_value = TestUserFactory.alice()

        with pytest.raises(InvalidCredentialsError):
            await self.service.login("alice01", "Wr0ng!Pass")

        self.user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_login_unknown_user(self):
        """Unknown users fail exactly like wrong passwords."""
        with pytest.raises(InvalidCredentialsError):
            await self.service.login("nobody", STRONG_PASSWORD)

    @pytest.mark.asyncio
    async def test_login_missing_input(self):
        with pytest.raises(InvalidCredentialsError):
            await self.service.login("", "")
        self.user_repo.find_by_username_or_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_login_inactive_user(self):
        """Test that deactivated accounts cannot log in."""
        user = TestUserFactory.alice()
        user.deactivate()
        self.user_repo.find_by_username_or_email.return_value = user

        with pytest.raises(InactiveUserError):
            await self.service.login("alice01", STRONG_PASSWORD)


class TestAuthenticationServiceRefresh:
    """Tests for token refresh."""

    def setup_method(self):
        """Set up test fixtures."""
        self.jwt_service = JWTService(secret_key="test-secret")
        self.user = TestUserFactory.alice()

    @pytest.mark.asyncio
    async def test_refresh_issues_new_pair(self, user_repo):
        user_repo.find_by_id.return_value = self.user
        service = AuthenticationService(user_repo, self.jwt_service)
        refresh_token = self.jwt_service.create_refresh_token(
            str(self.user.id), self.user.email.value,
        )

        tokens = await service.refresh(refresh_token)

        payload = self.jwt_service.verify_token(tokens.access_token)
        assert payload.is_access_token()

    @pytest.mark.asyncio
    async def test_refresh_rejects_access_token(self, user_repo):
        """Access tokens cannot be used to refresh."""
        service = AuthenticationService(user_repo, self.jwt_service)
        access_token = self.jwt_service.create_access_token(
            str(self.user.id), self.user.email.value,
        )

        with pytest.raises(InvalidTokenError, match="Expected refresh token"):
            await service.refresh(access_token)

    @pytest.mark.asyncio
    async def test_refresh_for_inactive_user(self, user_repo):
        self.user.deactivate()
        user_repo.find_by_id.return_value = self.user
        service = AuthenticationService(user_repo, self.jwt_service)
        refresh_token = self.jwt_service.create_refresh_token(
            str(self.user.id), self.user.email.value,
        )

        with pytest.raises(InvalidTokenError, match="inactive"):
            await service.refresh(refresh_token)


class TestAuthenticationServicePasswordReset:
    """Tests for the password reset flow."""

    @pytest.fixture(autouse=True)
    def _service(self, user_repo, event_bus):
        self.user_repo = user_repo
        self.bus, self.received = event_bus
        self.service = AuthenticationService(
            user_repository=user_repo,
            jwt_service=JWTService(secret_key="test-secret"),
            event_bus=self.bus,
            reset_token_expire_minutes=30,
        )

    @pytest.mark.asyncio
    async def test_request_stores_only_the_hash(self):
        """Test that the raw token is returned and its hash is stored."""
        user = TestUserFactory.alice()
        self.user_repo.find_by_email.return_value = user

        raw_token = await self.service.request_password_reset("Alice@Example.com")

        assert raw_token
        assert user.reset_token == _hash(raw_token)
        assert user.reset_token_expires_at > utc_now() + timedelta(minutes=29)
        assert len(self.received) == 1

    @pytest.mark.asyncio
    async def test_request_for_unknown_email(self):
        assert await self.service.request_password_reset("ghost@example.com") is None
        self.user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_request_for_malformed_email(self):
        assert await self.service.request_password_reset("not-an-email") is None
        self.user_repo.find_by_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reset_password(self):
        """Test that a valid token sets the password and is consumed."""
        user = TestUserFactory.alice()
        user.set_reset_token(_hash("raw-token"), utc_now() + timedelta(minutes=5))
        user.clear_events()
        self.user_repo.find_by_reset_token.return_value = user

        saved = await self.service.reset_password("raw-token", NEW_PASSWORD)

        self.user_repo.find_by_reset_token.assert_awaited_once_with(_hash("raw-token"))
        assert saved.password.compare(NEW_PASSWORD)
        assert saved.reset_token is None
        assert saved.reset_token_expires_at is None

    @pytest.mark.asyncio
    async def test_reset_with_expired_token(self):
        user = TestUserFactory.alice()
        user.set_reset_token(_hash("raw-token"), utc_now() - timedelta(minutes=1))
        self.user_repo.find_by_reset_token.return_value = user

        with pytest.raises(InvalidResetTokenError):
            await self.service.reset_password("raw-token", NEW_PASSWORD)

        self.user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reset_with_unknown_token(self):
        with pytest.raises(InvalidResetTokenError):
            await self.service.reset_password("unknown", NEW_PASSWORD)

    @pytest.mark.asyncio
    async def test_reset_with_weak_password(self):
        user = TestUserFactory.alice()
        user.set_reset_token(_hash("raw-token"), utc_now() + timedelta(minutes=5))
        self.user_repo.find_by_reset_token.return_value = user

        with pytest.raises(WeakPasswordError):
            await self.service.reset_password("raw-token", "short")

        assert user.reset_token == _hash("raw-token")
