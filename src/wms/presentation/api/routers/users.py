"""User management router.

Reads are available to any authenticated user; writes require an admin
role (``super-admin`` or ``admin``).
"""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Query, Response

from wms.presentation.api.dependencies import (
    AdminUser,
    CurrentUser,
    DBSession,
    UserControllerDep,
    finish_transaction,
)
from wms.presentation.api.schemas.users import (
    AssignRolesBody,
    CreateUserBody,
    UpdateUserBody,
)

router = APIRouter()


@router.get(
    "",
    summary="List users",
    responses={
        200: {"description": "One page of users, pagination in meta"},
        400: {"description": "Invalid paging, sorting or filter values"},
    },
)
async def list_users(  # NOQA: PLR0913
    controller: UserControllerDep,
    _: CurrentUser,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    search: Optional[str] = None,
    is_active: Annotated[Optional[bool], Query(alias="isActive")] = None,
    is_email_verified: Annotated[
        Optional[bool],
        Query(alias="isEmailVerified"),
    ] = None,
    role_id: Annotated[Optional[str], Query(alias="roleId")] = None,
    created_after: Annotated[Optional[datetime], Query(alias="createdAfter")] = None,
    created_before: Annotated[
        Optional[datetime],
        Query(alias="createdBefore"),
    ] = None,
    sort_by: Annotated[Optional[str], Query(alias="sortBy")] = None,
    sort_order: Annotated[Optional[str], Query(alias="sortOrder")] = None,
) -> Response:
    return await controller.get_users(
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
    )


@router.post(
    "",
    summary="Create a user",
    responses={
        201: {"description": "User created"},
        400: {"description": "Validation failed"},
        409: {"description": "Username or email already exists"},
    },
)
async def create_user(
    body: CreateUserBody,
    controller: UserControllerDep,
    admin: AdminUser,
    session: DBSession,
) -> Response:
    response = await controller.create_user(body, actor=admin)
    return await finish_transaction(session, response)


@router.get(
    "/{user_id}",
    summary="Get a user by ID",
    responses={
        200: {"description": "User found"},
        400: {"description": "Malformed user ID"},
        404: {"description": "User not found"},
    },
)
async def get_user(
    user_id: str,
    controller: UserControllerDep,
    _: CurrentUser,
    include_roles: Annotated[bool, Query(alias="includeRoles")] = False,
) -> Response:
    return await controller.get_user_by_id(user_id, include_roles=include_roles)


@router.put(
    "/{user_id}",
    summary="Update a user",
    responses={
        200: {"description": "User updated"},
        400: {"description": "Validation failed or no fields given"},
        404: {"description": "User not found"},
    },
)
async def update_user(
    user_id: str,
    body: UpdateUserBody,
    controller: UserControllerDep,
    admin: AdminUser,
    session: DBSession,
) -> Response:
    response = await controller.update_user(user_id, body, actor=admin)
    return await finish_transaction(session, response)


@router.delete(
    "/{user_id}",
    summary="Delete a user",
    responses={
        200: {"description": "User soft-deleted, or removed when permanent"},
        404: {"description": "User not found"},
        422: {"description": "Users cannot delete their own account"},
    },
)
async def delete_user(
    user_id: str,
    controller: UserControllerDep,
    admin: AdminUser,
    session: DBSession,
    permanent: bool = False,
) -> Response:
    response = await controller.delete_user(user_id, permanent=permanent, actor=admin)
    return await finish_transaction(session, response)


@router.post(
    "/{user_id}/restore",
    summary="Restore a soft-deleted user",
    responses={
        200: {"description": "User restored"},
        404: {"description": "No deleted user with this ID"},
    },
)
async def restore_user(
    user_id: str,
    controller: UserControllerDep,
    admin: AdminUser,
    session: DBSession,
) -> Response:
    response = await controller.restore_user(user_id, actor=admin)
    return await finish_transaction(session, response)


@router.put(
    "/{user_id}/roles",
    summary="Replace a user's roles",
    responses={
        200: {"description": "Roles assigned"},
        404: {"description": "User or role not found"},
        422: {"description": "A role is inactive"},
    },
)
async def assign_roles(
    user_id: str,
    body: AssignRolesBody,
    controller: UserControllerDep,
    admin: AdminUser,
    session: DBSession,
) -> Response:
    response = await controller.assign_roles(user_id, body, actor=admin)
    return await finish_transaction(session, response)
