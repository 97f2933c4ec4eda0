"""DTOs for user data crossing into the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from wms.domain.user import User


def _iso(value: Optional[date | datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class UserResponseDTO:
    """Flat, serializable view of a User aggregate."""

    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str]
    address: Optional[str]
    birth_date: Optional[date]
    gender: Optional[str]
    avatar_url: Optional[str]
    language: str
    time_zone: str
    is_active: bool
    is_email_verified: bool
    email_verified_at: Optional[datetime]
    last_login_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    full_name: str
    display_name: str
    roles: Optional[list[str]] = field(default=None)

    @classmethod
    def from_entity(
        cls,
        user: User,
        roles: Optional[list[str]] = None,
    ) -> UserResponseDTO:
        profile = user.profile
        return cls(
            id=str(user.id),
            username=user.username.value,
            email=user.email.value,
            first_name=profile.first_name,
            last_name=profile.last_name,
            phone=profile.phone,
            address=profile.address,
            birth_date=profile.birth_date,
            gender=profile.gender,
            avatar_url=profile.avatar_url,
            language=profile.language,
            time_zone=profile.time_zone,
            is_active=user.is_active,
            is_email_verified=user.is_email_verified,
            email_verified_at=user.email_verified_at,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
            full_name=user.full_name,
            display_name=user.display_name,
            roles=roles,
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "address": self.address,
            "birth_date": _iso(self.birth_date),
            "gender": self.gender,
            "avatar_url": self.avatar_url,
            "language": self.language,
            "time_zone": self.time_zone,
            "is_active": self.is_active,
            "is_email_verified": self.is_email_verified,
            "email_verified_at": _iso(self.email_verified_at),
            "last_login_at": _iso(self.last_login_at),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
            "full_name": self.full_name,
            "display_name": self.display_name,
        }
        if self.roles is not None:
            data["roles"] = self.roles
        return data
