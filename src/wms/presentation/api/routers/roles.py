"""Role management router."""

from typing import Annotated, Optional

from fastapi import APIRouter, Query, Response

from wms.presentation.api.dependencies import (
    AdminUser,
    CurrentUser,
    DBSession,
    RoleControllerDep,
    finish_transaction,
)
from wms.presentation.api.schemas.roles import CreateRoleBody, UpdateRoleBody

router = APIRouter()


@router.get(
    "",
    summary="List roles",
    responses={
        200: {"description": "One page of roles, pagination in meta"},
        400: {"description": "Invalid paging, sorting or filter values"},
    },
)
async def list_roles(  # NOQA: PLR0913
    controller: RoleControllerDep,
    _: CurrentUser,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    search: Optional[str] = None,
    is_active: Annotated[Optional[bool], Query(alias="isActive")] = None,
    is_system_role: Annotated[Optional[bool], Query(alias="isSystemRole")] = None,
    sort_by: Annotated[Optional[str], Query(alias="sortBy")] = None,
    sort_order: Annotated[Optional[str], Query(alias="sortOrder")] = None,
) -> Response:
    return await controller.get_roles(
        page=page,
        limit=limit,
        search=search,
        is_active=is_active,
        is_system_role=is_system_role,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.post(
    "",
    summary="Create a role",
    responses={
        201: {"description": "Role created"},
        400: {"description": "Invalid name or slug"},
        409: {"description": "Role name or slug already exists"},
    },
)
async def create_role(
    body: CreateRoleBody,
    controller: RoleControllerDep,
    admin: AdminUser,
    session: DBSession,
) -> Response:
    response = await controller.create_role(body, actor=admin)
    return await finish_transaction(session, response)


@router.get(
    "/{role_id}",
    summary="Get a role by ID",
    responses={
        200: {"description": "Role found"},
        404: {"description": "Role not found"},
    },
)
async def get_role(
    role_id: str,
    controller: RoleControllerDep,
    _: CurrentUser,
) -> Response:
    return await controller.get_role_by_id(role_id)


@router.put(
    "/{role_id}",
    summary="Update a role",
    responses={
        200: {"description": "Role updated"},
        404: {"description": "Role not found"},
        409: {"description": "Role name already exists"},
        422: {"description": "System roles cannot be modified"},
    },
)
async def update_role(
    role_id: str,
    body: UpdateRoleBody,
    controller: RoleControllerDep,
    admin: AdminUser,
    session: DBSession,
) -> Response:
    response = await controller.update_role(role_id, body, actor=admin)
    return await finish_transaction(session, response)


@router.delete(
    "/{role_id}",
    summary="Delete a role",
    responses={
        200: {"description": "Role soft-deleted"},
        404: {"description": "Role not found"},
        422: {"description": "System roles cannot be deleted"},
    },
)
async def delete_role(
    role_id: str,
    controller: RoleControllerDep,
    admin: AdminUser,
    session: DBSession,
) -> Response:
    response = await controller.delete_role(role_id, actor=admin)
    return await finish_transaction(session, response)


@router.post(
    "/{role_id}/activate",
    summary="Activate a role",
    responses={
        200: {"description": "Role active"},
        404: {"description": "Role not found"},
    },
)
async def activate_role(
    role_id: str,
    controller: RoleControllerDep,
    admin: AdminUser,
    session: DBSession,
) -> Response:
    response = await controller.change_status(role_id, is_active=True, actor=admin)
    return await finish_transaction(session, response)


@router.post(
    "/{role_id}/deactivate",
    summary="Deactivate a role",
    responses={
        200: {"description": "Role inactive"},
        404: {"description": "Role not found"},
        422: {"description": "System roles cannot be deactivated"},
    },
)
async def deactivate_role(
    role_id: str,
    controller: RoleControllerDep,
    admin: AdminUser,
    session: DBSession,
) -> Response:
    response = await controller.change_status(role_id, is_active=False, actor=admin)
    return await finish_transaction(session, response)
