"""Authentication service for login, token refresh and password reset."""

from __future__ import annotations

import hashlib
import logging
import secrets
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from wms.domain.shared import DomainException, EntityId, utc_now
from wms.domain.user import (
    Email,
    InactiveUserError,
    InvalidResetTokenError,
    Password,
    User,
)
from wms_auth import (
    ACCESS_TOKEN,
    REFRESH_TOKEN,
    InvalidCredentialsError,
    InvalidTokenError,
    JWTService,
    TokenPair,
    TokenPayload,
)

if TYPE_CHECKING:
    from wms.application.events import InMemoryEventBus
    from wms.domain.user import UserRepository

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Bridges the token infrastructure in ``wms_auth`` with the User
    aggregate:
    - Login with username or email
    - Token refresh
    - Password reset via a one-time token

    Reset tokens are stored as SHA-256 hashes; only the caller of
    ``request_password_reset`` ever sees the raw value.
    """

    DEFAULT_RESET_TOKEN_EXPIRE_MINUTES = 60

    def __init__(
        self,
        user_repository: UserRepository,
        jwt_service: JWTService,
        event_bus: Optional[InMemoryEventBus] = None,
        reset_token_expire_minutes: int = DEFAULT_RESET_TOKEN_EXPIRE_MINUTES,
    ):
        self._user_repo = user_repository
        self._jwt_service = jwt_service
        self._event_bus = event_bus
        self._reset_expire = timedelta(minutes=reset_token_expire_minutes)

    @staticmethod
    def _hash_token(raw_token: str) -> str:
        return hashlib.sha256(raw_token.encode()).hexdigest()

    async def _issue_tokens(self, user: User) -> TokenPair:
        roles = await self._user_repo.get_role_slugs(user.id)
        return self._jwt_service.create_token_pair(
            user_id=str(user.id),
            email=user.email.value,
            roles=roles,
        )

    async def _save(self, user: User) -> User:
        saved = await self._user_repo.save(user)
        if self._event_bus is not None:
            await self._event_bus.publish(user.pull_events())
        return saved

    async def login(self, identifier: str, password: str) -> tuple[User, TokenPair]:
        """
        Authenticate with a username or email and a password.

        Raises
        ------
        InvalidCredentialsError
            If no user matches or the password is wrong
        InactiveUserError
            If the account is deactivated
        """
        if not identifier or not password:
            raise InvalidCredentialsError

        user = await self._user_repo.find_by_username_or_email(identifier.strip())
        if user is None or not user.password.compare(password):
            logger.info("Failed login attempt for %s", identifier)
            raise InvalidCredentialsError

        if not user.is_active:
            raise InactiveUserError(str(user.id))

        user.record_login()
        user = await self._save(user)
        tokens = await self._issue_tokens(user)

        logger.info("User logged in: %s", user.username.value)
        return user, tokens

    async def refresh(self, refresh_token: str) -> TokenPair:
        payload = self._jwt_service.verify_token(refresh_token, expected_type=REFRESH_TOKEN)

        user = await self._user_repo.find_by_id(EntityId.from_string(payload.user_id))
        if user is None:
            msg = "User not found"
            raise InvalidTokenError(msg)
        if not user.is_active:
            msg = "User account is inactive"
            raise InvalidTokenError(msg)

        logger.debug("Tokens refreshed for user: %s", user.id)
        return await self._issue_tokens(user)

    async def request_password_reset(self, email: str) -> Optional[str]:
        """
        Issue a reset token for the account behind ``email``.

        Unknown or malformed addresses return ``None`` without an error so
        callers cannot tell which accounts exist.

        Returns
        -------
        The raw token, or ``None`` if no token was issued
        """
        try:
            normalized = Email.create(email)
        except DomainException:
            logger.debug("Password reset requested for malformed email")
            return None

        user = await self._user_repo.find_by_email(normalized)
        if user is None or not user.is_active:
            logger.debug("Password reset requested for unknown email: %s", normalized)
            return None

        raw_token = secrets.token_urlsafe(32)
        user.set_reset_token(self._hash_token(raw_token), utc_now() + self._reset_expire)
        await self._save(user)

        logger.info("Password reset token issued for user %s", user.id)
        logger.debug("Password reset token for %s: %s", normalized, raw_token)
        return raw_token

    async def reset_password(self, token: str, new_password: str) -> User:
        """
        Set a new password using a reset token. The token is single use.

        Raises
        ------
        InvalidResetTokenError
            If the token is unknown or expired
        WeakPasswordError
            If the new password fails the strength rules
        """
        if not token:
            raise InvalidResetTokenError

        token_hash = self._hash_token(token)
        user = await self._user_repo.find_by_reset_token(token_hash)
        if user is None or not user.is_reset_token_valid(token_hash):
            raise InvalidResetTokenError

        user.change_password(Password.create(new_password), user.id)
        user.clear_reset_token(user.id)
        saved = await self._save(user)

        logger.info("Password reset completed for user: %s", user.id)
        return saved

    def verify_access_token(self, token: str) -> TokenPayload:
        return self._jwt_service.verify_token(token, expected_type=ACCESS_TOKEN)
