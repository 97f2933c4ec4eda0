"""Update profile, password and status of an existing user."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from wms.application.events import InMemoryEventBus
from wms.application.result import ErrorKind, Result
from wms.application.use_cases._validation import validate_entity_id
from wms.domain.shared import DomainException, EntityId
from wms.domain.user import Password, User, UserProfile, UserRepository

logger = logging.getLogger(__name__)

# Empty strings count as "not provided" for these fields
_REQUIRED_PROFILE_FIELDS = ("first_name", "last_name", "language", "time_zone")
# Empty strings clear these fields
_OPTIONAL_PROFILE_FIELDS = ("phone", "address", "birth_date", "gender", "avatar_url")


@dataclass(frozen=True)
class UpdateUserRequest:
    """Only fields that are not ``None`` are applied."""

    user_id: Optional[str]
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    avatar_url: Optional[str] = None
    language: Optional[str] = None
    time_zone: Optional[str] = None
    is_active: Optional[bool] = None
    password: Optional[str] = None
    updated_by: Optional[str] = None

    def profile_changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        for name in _REQUIRED_PROFILE_FIELDS:
            value = getattr(self, name)
            if value:
                changes[name] = value
        for name in _OPTIONAL_PROFILE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                changes[name] = value
        return changes

    def has_any_updates(self) -> bool:
        return bool(self.profile_changes() or self.password or self.is_active is not None)


@dataclass(frozen=True)
class UpdateUserResponse:
    user: User
    message: str


class UpdateUserUseCase:
    """Apply a partial update to a user.

    Order of application: profile, password, status. Each real change
    records its own domain event.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        event_bus: Optional[InMemoryEventBus] = None,
    ):
        self._user_repo = user_repository
        self._event_bus = event_bus

    async def execute(self, request: UpdateUserRequest) -> Result[UpdateUserResponse]:
        try:
            errors = self._validate(request)
            if errors:
                return Result.fail(", ".join(errors), ErrorKind.VALIDATION)

            user_id = EntityId.from_string(request.user_id)  # type: ignore[arg-type]
            updated_by = (
                EntityId.from_string(request.updated_by) if request.updated_by else None
            )

            user = await self._user_repo.find_by_id(user_id)
            if user is None:
                return Result.fail("User not found", ErrorKind.NOT_FOUND)

            profile_changes = request.profile_changes()
            if profile_changes:
                user.update_profile(user.profile.update(**profile_changes), updated_by)

            if request.password:
                user.change_password(Password.create(request.password), updated_by)

            if request.is_active is True:
                user.activate(updated_by)
            elif request.is_active is False:
                user.deactivate(updated_by)

            saved = await self._user_repo.save(user)

            if self._event_bus is not None:
                await self._event_bus.publish(user.pull_events())

            logger.info("Updated user %s", saved.id)
            return Result.ok(
                UpdateUserResponse(user=saved, message="User updated successfully"),
            )
        except Exception as e:
            logger.warning("Failed to update user %s: %s", request.user_id, e)
            return Result.from_exception(e, "Failed to update user")

    @staticmethod
    def _validate(request: UpdateUserRequest) -> list[str]:
        errors = validate_entity_id(request.user_id, "User ID")

        profile_changes = request.profile_changes()
        if profile_changes:
            # Names may be absent from a partial update; validate the rest
            # against placeholder names.
            probe = {"first_name": "temp", "last_name": "temp", **profile_changes}
            try:
                UserProfile.create(**probe)
            except DomainException as e:
                errors.append(e.message)

        if request.password:
            is_valid, password_errors = Password.validate_minimum_requirements(
                request.password,
            )
            if not is_valid:
                errors.extend(password_errors)

        if not request.has_any_updates():
            errors.append("At least one field must be provided for update")

        return errors
