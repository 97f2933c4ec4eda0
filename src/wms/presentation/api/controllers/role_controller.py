"""HTTP adapter for the role use cases."""

from __future__ import annotations

from typing import Optional

from fastapi import Request, Response

from wms.application.context import UserContext
from wms.application.dtos import RoleResponseDTO
from wms.application.events import InMemoryEventBus
from wms.application.use_cases.role import (
    ChangeRoleStatusRequest,
    ChangeRoleStatusUseCase,
    CreateRoleRequest,
    CreateRoleUseCase,
    DeleteRoleRequest,
    DeleteRoleUseCase,
    GetRoleByIdRequest,
    GetRoleByIdUseCase,
    GetRolesWithPaginationRequest,
    GetRolesWithPaginationUseCase,
    UpdateRoleRequest,
    UpdateRoleUseCase,
)
from wms.domain.role import RoleRepository
from wms.presentation.api.controllers.base_controller import (
    BaseController,
    async_handler,
)
from wms.presentation.api.schemas.roles import CreateRoleBody, UpdateRoleBody


def _actor_id(actor: Optional[UserContext]) -> Optional[str]:
    return str(actor.user_id) if actor is not None else None


class RoleController(BaseController):
    def __init__(
        self,
        request: Optional[Request],
        role_repository: RoleRepository,
        event_bus: Optional[InMemoryEventBus] = None,
    ):
        super().__init__(request)
        self._role_repo = role_repository
        self._event_bus = event_bus

    @async_handler
    async def create_role(
        self,
        body: CreateRoleBody,
        actor: Optional[UserContext] = None,
    ) -> Response:
        result = await CreateRoleUseCase(self._role_repo, self._event_bus).execute(
            CreateRoleRequest(
                name=body.name,
                slug=body.slug,
                description=body.description,
                created_by=_actor_id(actor),
            ),
        )
        if result.is_failure:
            return self.failure(result)

        response = result.get_value()
        dto = RoleResponseDTO.from_entity(response.role)
        return self.created(dto.to_dict(), response.message)

    @async_handler
    async def get_role_by_id(self, role_id: str) -> Response:
        result = await GetRoleByIdUseCase(self._role_repo).execute(
            GetRoleByIdRequest(role_id=role_id),
        )
        if result.is_failure:
            return self.failure(result)

        response = result.get_value()
        dto = RoleResponseDTO.from_entity(response.role)
        return self.ok(dto.to_dict(), response.message)

    @async_handler
    async def get_roles(  # NOQA: PLR0913
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        is_system_role: Optional[bool] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Response:
        result = await GetRolesWithPaginationUseCase(self._role_repo).execute(
            GetRolesWithPaginationRequest(
                page=page,
                limit=limit,
                search=search,
                is_active=is_active,
                is_system_role=is_system_role,
                sort_by=sort_by,
                sort_order=sort_order,
            ),
        )
        if result.is_failure:
            return self.failure(result)

        response = result.get_value()
        paginated = response.result
        roles = [RoleResponseDTO.from_entity(role).to_dict() for role in paginated.data]
        return self.ok_paginated(roles, paginated.pagination, response.message)

    @async_handler
    async def update_role(
        self,
        role_id: str,
        body: UpdateRoleBody,
        actor: Optional[UserContext] = None,
    ) -> Response:
        result = await UpdateRoleUseCase(self._role_repo, self._event_bus).execute(
            UpdateRoleRequest(
                role_id=role_id,
                name=body.name,
                description=body.description,
                updated_by=_actor_id(actor),
            ),
        )
        if result.is_failure:
            return self.failure(result)

        response = result.get_value()
        dto = RoleResponseDTO.from_entity(response.role)
        return self.ok(dto.to_dict(), response.message)

    @async_handler
    async def change_status(
        self,
        role_id: str,
        is_active: bool,
        actor: Optional[UserContext] = None,
    ) -> Response:
        use_case = ChangeRoleStatusUseCase(self._role_repo, self._event_bus)
        result = await use_case.execute(
            ChangeRoleStatusRequest(
                role_id=role_id,
                is_active=is_active,
                updated_by=_actor_id(actor),
            ),
        )
        if result.is_failure:
            return self.failure(result)

        response = result.get_value()
        dto = RoleResponseDTO.from_entity(response.role)
        return self.ok(dto.to_dict(), response.message)

    @async_handler
    async def delete_role(
        self,
        role_id: str,
        actor: Optional[UserContext] = None,
    ) -> Response:
        result = await DeleteRoleUseCase(self._role_repo).execute(
            DeleteRoleRequest(role_id=role_id, deleted_by=_actor_id(actor)),
        )
        if result.is_failure:
            return self.failure(result)
        return self.ok(message=result.get_value().message)
