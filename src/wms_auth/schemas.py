"""Data classes shared by the token service and its callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    Attributes
    ----------
    user_id
        String form of the user's id (the ``sub`` claim)
    email
        The user's email address
    exp
        Token expiration timestamp
    token_type
        Either ``"access"`` or ``"refresh"``
    roles
        Role slugs the user held when the token was issued
    """

    user_id: str
    email: str
    exp: datetime
    token_type: str
    roles: tuple[str, ...] = field(default_factory=tuple)

    def is_expired(self) -> bool:
        return datetime.now(tz=self.exp.tzinfo) > self.exp

    def is_access_token(self) -> bool:
        return self.token_type == ACCESS_TOKEN

    def is_refresh_token(self) -> bool:
        return self.token_type == REFRESH_TOKEN


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"
