"""HTTP adapter for the user use cases."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import Request, Response

from wms.application.context import UserContext
from wms.application.dtos import RoleResponseDTO, UserResponseDTO
from wms.application.events import InMemoryEventBus
from wms.application.use_cases.user import (
    AssignUserRolesRequest,
    AssignUserRolesUseCase,
    CreateUserRequest,
    CreateUserUseCase,
    DeleteUsersRequest,
    DeleteUsersUseCase,
    GetUserByIdRequest,
    GetUserByIdUseCase,
    GetUsersWithPaginationRequest,
    GetUsersWithPaginationUseCase,
    RestoreUsersRequest,
    RestoreUsersUseCase,
    UpdateUserRequest,
    UpdateUserUseCase,
)
from wms.domain.role import RoleRepository
from wms.domain.user import UserRepository
from wms.presentation.api.controllers.base_controller import (
    BaseController,
    async_handler,
)
from wms.presentation.api.schemas.users import (
    AssignRolesBody,
    CreateUserBody,
    UpdateUserBody,
)


def _actor_id(actor: Optional[UserContext]) -> Optional[str]:
    return str(actor.user_id) if actor is not None else None


class UserController(BaseController):
    """Translates requests into use-case calls and results into envelopes."""

    def __init__(
        self,
        request: Optional[Request],
        user_repository: UserRepository,
        role_repository: RoleRepository,
        event_bus: Optional[InMemoryEventBus] = None,
    ):
        super().__init__(request)
        self._user_repo = user_repository
        self._role_repo = role_repository
        self._event_bus = event_bus

    @async_handler
    async def create_user(
        self,
        body: CreateUserBody,
        actor: Optional[UserContext] = None,
    ) -> Response:
        use_case = CreateUserUseCase(self._user_repo, self._role_repo, self._event_bus)
        result = await use_case.execute(
            CreateUserRequest(
                username=body.username,
                email=body.email,
                first_name=body.first_name,
                last_name=body.last_name,
                password=body.password,
                phone=body.phone,
                address=body.address,
                birth_date=body.birth_date,
                gender=body.gender,
                language=body.language,
                time_zone=body.time_zone,
                is_active=body.is_active,
                created_by=_actor_id(actor),
            ),
        )
        if result.is_failure:
            return self.failure(result)

        response = result.get_value()
        dto = UserResponseDTO.from_entity(response.user)
        return self.created(dto.to_dict(), response.message)

    @async_handler
    async def get_user_by_id(
        self,
        user_id: str,
        include_roles: bool = False,
    ) -> Response:
        result = await GetUserByIdUseCase(self._user_repo).execute(
            GetUserByIdRequest(user_id=user_id, include_roles=include_roles),
        )
        if result.is_failure:
            return self.failure(result)

        response = result.get_value()
        dto = UserResponseDTO.from_entity(response.user, roles=response.roles)
        return self.ok(dto.to_dict(), response.message)

    @async_handler
    async def update_user(
        self,
        user_id: str,
        body: UpdateUserBody,
        actor: Optional[UserContext] = None,
    ) -> Response:
        use_case = UpdateUserUseCase(self._user_repo, self._event_bus)
        result = await use_case.execute(
            UpdateUserRequest(
                user_id=user_id,
                first_name=body.first_name,
                last_name=body.last_name,
                phone=body.phone,
                address=body.address,
                birth_date=body.birth_date,
                gender=body.gender,
                avatar_url=body.avatar_url,
                language=body.language,
                time_zone=body.time_zone,
                is_active=body.is_active,
                password=body.password,
                updated_by=_actor_id(actor),
            ),
        )
        if result.is_failure:
            return self.failure(result)

        response = result.get_value()
        dto = UserResponseDTO.from_entity(response.user)
        return self.ok(dto.to_dict(), response.message)

    @async_handler
    async def get_users(  # NOQA: PLR0913
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        is_email_verified: Optional[bool] = None,
        role_id: Optional[str] = None,
        created_after: Optional[datetime] = None,
        created_before: Optional[datetime] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Response:
        result = await GetUsersWithPaginationUseCase(self._user_repo).execute(
            GetUsersWithPaginationRequest(
                page=page,
                limit=limit,
                search=search,
                is_active=is_active,
                is_email_verified=is_email_verified,
                role_id=role_id,
                created_after=created_after,
                created_before=created_before,
                sort_by=sort_by,
                sort_order=sort_order,
            ),
        )
        if result.is_failure:
            return self.failure(result)

        response = result.get_value()
        paginated = response.result
        users = [UserResponseDTO.from_entity(user).to_dict() for user in paginated.data]
        return self.ok_paginated(users, paginated.pagination, response.message)

    @async_handler
    async def delete_user(
        self,
        user_id: str,
        permanent: bool = False,
        actor: Optional[UserContext] = None,
    ) -> Response:
        result = await DeleteUsersUseCase(self._user_repo).execute(
            DeleteUsersRequest(
                user_ids=[user_id],
                deleted_by=_actor_id(actor),
                permanent=permanent,
            ),
        )
        if result.is_failure:
            return self.failure(result)
        return self.ok(message=result.get_value().message)

    @async_handler
    async def restore_user(
        self,
        user_id: str,
        actor: Optional[UserContext] = None,
    ) -> Response:
        result = await RestoreUsersUseCase(self._user_repo).execute(
            RestoreUsersRequest(user_ids=[user_id], restored_by=_actor_id(actor)),
        )
        if result.is_failure:
            return self.failure(result)
        return self.ok(message=result.get_value().message)

    @async_handler
    async def assign_roles(
        self,
        user_id: str,
        body: AssignRolesBody,
        actor: Optional[UserContext] = None,
    ) -> Response:
        use_case = AssignUserRolesUseCase(self._user_repo, self._role_repo)
        result = await use_case.execute(
            AssignUserRolesRequest(
                user_id=user_id,
                role_ids=body.role_ids,
                assigned_by=_actor_id(actor),
            ),
        )
        if result.is_failure:
            return self.failure(result)

        response = result.get_value()
        roles = [RoleResponseDTO.from_entity(role) for role in response.roles]
        data = UserResponseDTO.from_entity(
            response.user,
            roles=[role.slug for role in roles],
        ).to_dict()
        return self.ok(data, response.message)
