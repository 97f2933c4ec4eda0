"""Create a new user account."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from wms.application.events import InMemoryEventBus
from wms.application.result import ErrorKind, Result
from wms.domain.role import RoleRepository
from wms.domain.shared import DomainException, EntityId
from wms.domain.user import (
    Email,
    Password,
    User,
    UserProfile,
    UserRepository,
    Username,
)

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGES = ("Username already exists", "Email already exists")


@dataclass(frozen=True)
class CreateUserRequest:
    username: Optional[str]
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    password: Optional[str]
    phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    language: Optional[str] = None
    time_zone: Optional[str] = None
    is_active: bool = True
    created_by: Optional[str] = None


@dataclass(frozen=True)
class CreateUserResponse:
    user: User
    message: str


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class CreateUserUseCase:
    """Validate, construct and persist a new user.

    All validation problems are reported at once, joined with ``", "``.
    When a role repository is given, the new user receives the default
    role if one exists.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        role_repository: Optional[RoleRepository] = None,
        event_bus: Optional[InMemoryEventBus] = None,
    ):
        self._user_repo = user_repository
        self._role_repo = role_repository
        self._event_bus = event_bus

    async def execute(self, request: CreateUserRequest) -> Result[CreateUserResponse]:
        try:
            validation = await self._validate(request)
            if validation.is_failure:
                return validation

            username = Username.create(request.username)  # type: ignore[arg-type]
            email = Email.create(request.email)  # type: ignore[arg-type]
            profile = self._build_profile(request)
            password = Password.create(request.password)  # type: ignore[arg-type]
            created_by = (
                EntityId.from_string(request.created_by) if request.created_by else None
            )

            existing = await self._user_repo.find_by_username_or_email(username.value)
            if existing is None:
                existing = await self._user_repo.find_by_username_or_email(email.value)
            if existing is not None:
                return Result.fail(
                    "User with this username or email already exists",
                    ErrorKind.CONFLICT,
                )

            user = User.create(username, email, profile, password, created_by)
            if not request.is_active:
                user.deactivate(created_by)

            saved = await self._user_repo.save(user)
            await self._assign_default_role(saved)

            if self._event_bus is not None:
                await self._event_bus.publish(user.pull_events())

            logger.info("Created user %s (%s)", saved.id, saved.username.value)
            return Result.ok(
                CreateUserResponse(user=saved, message="User created successfully"),
            )
        except Exception as e:
            logger.warning("Failed to create user: %s", e)
            return Result.from_exception(e, "Failed to create user")

    async def _validate(self, request: CreateUserRequest) -> Result[None]:
        errors: list[str] = []

        if _blank(request.username):
            errors.append("Username is required")
        if _blank(request.email):
            errors.append("Email is required")
        if _blank(request.first_name):
            errors.append("First name is required")
        if _blank(request.last_name):
            errors.append("Last name is required")
        if _blank(request.password):
            errors.append("Password is required")

        username: Optional[Username] = None
        email: Optional[Email] = None

        if request.username:
            try:
                username = Username.create(request.username)
            except DomainException as e:
                errors.append(e.message)

        if request.email:
            try:
                email = Email.create(request.email)
            except DomainException as e:
                errors.append(e.message)

        if not _blank(request.first_name) and not _blank(request.last_name):
            try:
                self._build_profile(request)
            except DomainException as e:
                errors.append(e.message)

        if request.password:
            is_valid, password_errors = Password.validate_minimum_requirements(
                request.password,
            )
            if not is_valid:
                errors.extend(password_errors)

        if username is not None and email is not None:
            if await self._user_repo.exists_by_username(username):
                errors.append("Username already exists")
            if await self._user_repo.exists_by_email(email):
                errors.append("Email already exists")

        if not errors:
            return Result.ok()

        only_duplicates = all(error in DUPLICATE_MESSAGES for error in errors)
        kind = ErrorKind.CONFLICT if only_duplicates else ErrorKind.VALIDATION
        return Result.fail(", ".join(errors), kind)

    @staticmethod
    def _build_profile(request: CreateUserRequest) -> UserProfile:
        return UserProfile.create(
            request.first_name,  # type: ignore[arg-type]
            request.last_name,  # type: ignore[arg-type]
            phone=request.phone,
            address=request.address,
            birth_date=request.birth_date,
            gender=request.gender,
            language=request.language,
            time_zone=request.time_zone,
        )

    async def _assign_default_role(self, user: User) -> None:
        if self._role_repo is None:
            return
        default_role = await self._role_repo.find_default_role()
        if default_role is not None and default_role.is_active:
            await self._user_repo.assign_roles(user.id, [default_role.id])
