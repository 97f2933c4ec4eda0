"""JWT token service.

Issues and verifies the HS256 tokens the API uses for bearer
authentication.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Sequence

import jwt

from wms_auth.exceptions import InvalidTokenError
from wms_auth.schemas import ACCESS_TOKEN, REFRESH_TOKEN, TokenPair, TokenPayload


class JWTService:
    """Create and verify access and refresh tokens.

    Access tokens carry the user's role slugs so the API can authorize
    without a database round trip; refresh tokens carry none.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token(user_id, "user@example.com", ["admin"])
    >>> service.verify_token(token).roles
    ('admin',)
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 1
    DEFAULT_REFRESH_EXPIRE_DAYS = 7
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
        refresh_token_expire_days: int = DEFAULT_REFRESH_EXPIRE_DAYS,
    ):
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._access_expire = timedelta(hours=access_token_expire_hours)
        self._refresh_expire = timedelta(days=refresh_token_expire_days)

    @property
    def access_token_lifetime_seconds(self) -> int:
        return int(self._access_expire.total_seconds())

    def create_access_token(
        self,
        user_id: str,
        email: str,
        roles: Sequence[str] = (),
        expires_delta: timedelta | None = None,
    ) -> str:
        return self._create_token(
            user_id=user_id,
            email=email,
            roles=roles,
            token_type=ACCESS_TOKEN,
            expires_delta=expires_delta or self._access_expire,
        )

    def create_refresh_token(
        self,
        user_id: str,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        return self._create_token(
            user_id=user_id,
            email=email,
            roles=(),
            token_type=REFRESH_TOKEN,
            expires_delta=expires_delta or self._refresh_expire,
        )

    def create_token_pair(
        self,
        user_id: str,
        email: str,
        roles: Sequence[str] = (),
    ) -> TokenPair:
        return TokenPair(
            access_token=self.create_access_token(user_id, email, roles),
            refresh_token=self.create_refresh_token(user_id, email),
            expires_in=self.access_token_lifetime_seconds,
        )

    def verify_token(self, token: str, expected_type: str | None = None) -> TokenPayload:
        """Verify and decode a JWT token.

        Parameters
        ----------
        token
            The encoded token
        expected_type
            ``"access"`` or ``"refresh"``; any type is accepted when omitted

        Raises
        ------
        InvalidTokenError
            If the token is invalid, expired, malformed or of another type
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
            )

            decoded = TokenPayload(
                user_id=str(payload["sub"]),
                email=payload["email"],
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_type=payload.get("type", ACCESS_TOKEN),
                roles=tuple(payload.get("roles", ())),
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

        if expected_type is not None and decoded.token_type != expected_type:
            msg = f"Expected {expected_type} token"
            raise InvalidTokenError(msg)
        return decoded

    def _create_token(
        self,
        user_id: str,
        email: str,
        roles: Sequence[str],
        token_type: str,
        expires_delta: timedelta,
    ) -> str:
        now = datetime.now(tz=timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "roles": list(roles),
            "type": token_type,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)
