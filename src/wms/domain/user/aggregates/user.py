"""User aggregate root."""

from __future__ import annotations

import secrets
from datetime import datetime
from typing import Optional

from wms.domain.shared.auditable_entity import AuditableEntity
from wms.domain.shared.entity_id import EntityId
from wms.domain.shared.time import ensure_tz_aware, utc_now
from wms.domain.user.events import (
    UserCreatedEvent,
    UserDeactivatedEvent,
    UserUpdatedEvent,
)
from wms.domain.user.value_objects import Email, Password, UserProfile, Username


class User(AuditableEntity):
    """
    User aggregate root.

    Username and email are fixed at creation; there are no setters for
    them. Every real state transition bumps ``updated_at`` and records
    exactly one domain event. Toggle methods are no-ops in their target
    state.
    """

    def __init__(  # NOQA: PLR0913
        self,
        username: Username,
        email: Email,
        profile: UserProfile,
        password: Password,
        is_active: bool = True,
        is_email_verified: bool = False,
        email_verified_at: Optional[datetime] = None,
        last_login_at: Optional[datetime] = None,
        reset_token: Optional[str] = None,
        reset_token_expires_at: Optional[datetime] = None,
        **audit,
    ):
        super().__init__(**audit)
        self._username = username
        self._email = email
        self._profile = profile
        self._password = password
        self._is_active = is_active
        self._is_email_verified = is_email_verified
        self._email_verified_at = email_verified_at
        self._last_login_at = last_login_at
        self._reset_token = reset_token
        self._reset_token_expires_at = reset_token_expires_at

    @classmethod
    def create(
        cls,
        username: Username,
        email: Email,
        profile: UserProfile,
        password: Password,
        created_by: Optional[EntityId] = None,
    ) -> User:
        user = cls(
            username=username,
            email=email,
            profile=profile,
            password=password,
            created_by=created_by,
            updated_by=created_by,
        )
        user.add_event(
            UserCreatedEvent(
                user.id,
                username=username.value,
                email=email.value,
                created_by=created_by,
            ),
        )
        return user

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        entity_id: EntityId,
        username: Username,
        email: Email,
        profile: UserProfile,
        password: Password,
        is_active: bool,
        is_email_verified: bool,
        created_at: datetime,
        updated_at: datetime,
        email_verified_at: Optional[datetime] = None,
        last_login_at: Optional[datetime] = None,
        reset_token: Optional[str] = None,
        reset_token_expires_at: Optional[datetime] = None,
        deleted_at: Optional[datetime] = None,
        created_by: Optional[EntityId] = None,
        updated_by: Optional[EntityId] = None,
        deleted_by: Optional[EntityId] = None,
    ) -> User:
        """Rehydrate from storage. Records no events."""
        return cls(
            username=username,
            email=email,
            profile=profile,
            password=password,
            is_active=is_active,
            is_email_verified=is_email_verified,
            email_verified_at=email_verified_at,
            last_login_at=last_login_at,
            reset_token=reset_token,
            reset_token_expires_at=reset_token_expires_at,
            entity_id=entity_id,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
            created_by=created_by,
            updated_by=updated_by,
            deleted_by=deleted_by,
        )

    @property
    def username(self) -> Username:
        return self._username

    @property
    def email(self) -> Email:
        return self._email

    @property
    def profile(self) -> UserProfile:
        return self._profile

    @property
    def password(self) -> Password:
        return self._password

    @property
    def password_hash(self) -> str:
        return self._password.hashed_value

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def is_email_verified(self) -> bool:
        return self._is_email_verified

    @property
    def email_verified_at(self) -> Optional[datetime]:
        return self._email_verified_at

    @property
    def last_login_at(self) -> Optional[datetime]:
        return self._last_login_at

    @property
    def reset_token(self) -> Optional[str]:
        return self._reset_token

    @property
    def reset_token_expires_at(self) -> Optional[datetime]:
        return self._reset_token_expires_at

    @property
    def full_name(self) -> str:
        return self._profile.full_name

    @property
    def display_name(self) -> str:
        return self._profile.display_name

    def update_profile(
        self,
        profile: UserProfile,
        updated_by: Optional[EntityId] = None,
    ) -> None:
        old_profile = self._profile
        self._profile = profile
        self.touch(updated_by)
        self.add_event(
            UserUpdatedEvent(
                self.id,
                changes={
                    "profile": {
                        "old": old_profile.to_dict(),
                        "new": profile.to_dict(),
                    },
                },
                updated_by=updated_by,
            ),
        )

    def change_password(
        self,
        password: Password,
        updated_by: Optional[EntityId] = None,
    ) -> None:
        self._password = password
        self.touch(updated_by)
        self.add_event(
            UserUpdatedEvent(
                self.id,
                changes={"password": "changed"},
                updated_by=updated_by,
            ),
        )

    def activate(self, updated_by: Optional[EntityId] = None) -> None:
        if self._is_active:
            return
        self._is_active = True
        self.touch(updated_by)
        self.add_event(
            UserUpdatedEvent(
                self.id,
                changes={"status": {"old": "inactive", "new": "active"}},
                updated_by=updated_by,
            ),
        )

    def deactivate(self, updated_by: Optional[EntityId] = None) -> None:
        if not self._is_active:
            return
        self._is_active = False
        self.touch(updated_by)
        self.add_event(UserDeactivatedEvent(self.id, deactivated_by=updated_by))

    def verify_email(self, updated_by: Optional[EntityId] = None) -> None:
        if self._is_email_verified:
            return
        self._is_email_verified = True
        self._email_verified_at = utc_now()
        self.touch(updated_by)
        self.add_event(
            UserUpdatedEvent(
                self.id,
                changes={"email_verified": True},
                updated_by=updated_by,
            ),
        )

    def record_login(self) -> None:
        self._last_login_at = utc_now()
        self.touch()
        self.add_event(
            UserUpdatedEvent(
                self.id,
                changes={"last_login_at": self._last_login_at.isoformat()},
            ),
        )

    def set_reset_token(
        self,
        token: str,
        expires_at: datetime,
        updated_by: Optional[EntityId] = None,
    ) -> None:
        self._reset_token = token
        self._reset_token_expires_at = expires_at
        self.touch(updated_by)
        self.add_event(
            UserUpdatedEvent(
                self.id,
                changes={"reset_token": "issued"},
                updated_by=updated_by,
            ),
        )

    def clear_reset_token(self, updated_by: Optional[EntityId] = None) -> None:
        if self._reset_token is None and self._reset_token_expires_at is None:
            return
        self._reset_token = None
        self._reset_token_expires_at = None
        self.touch(updated_by)
        self.add_event(
            UserUpdatedEvent(
                self.id,
                changes={"reset_token": "cleared"},
                updated_by=updated_by,
            ),
        )

    def is_reset_token_valid(self, token: str) -> bool:
        if not token or not self._reset_token or not self._reset_token_expires_at:
            return False
        if not secrets.compare_digest(self._reset_token, token):
            return False
        return utc_now() < ensure_tz_aware(self._reset_token_expires_at)

    def can_perform_admin_actions(self) -> bool:
        return self._is_active and self._is_email_verified

    def __repr__(self) -> str:
        return (
            f"User(id={self.id}, username={self._username.value!r}, "
            f"email={self._email.value!r}, is_active={self._is_active})"
        )
