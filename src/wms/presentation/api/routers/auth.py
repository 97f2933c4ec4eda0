"""Authentication router for login, token refresh and password reset."""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse

from wms.application.dtos import UserResponseDTO
from wms.domain.user import InactiveUserError, InvalidResetTokenError, WeakPasswordError
from wms.presentation.api.controllers import envelope_response
from wms.presentation.api.dependencies import (
    AuthService,
    CurrentUser,
    DBSession,
    UserRepo,
)
from wms.presentation.api.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    RefreshRequest,
    ResetPasswordRequest,
    TokenResponse,
)
from wms_auth import InvalidCredentialsError, InvalidTokenError, TokenPair

logger = logging.getLogger(__name__)

router = APIRouter()

PASSWORD_RESET_REQUESTED_MESSAGE = (
    "If an account exists for this email, a password reset token has been issued"
)


def _token_data(tokens: TokenPair) -> dict:
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        expires_in=tokens.expires_in,
    ).model_dump()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post(
    "/login",
    summary="Log in with username or email",
    responses={
        200: {"description": "Login successful, tokens issued"},
        401: {"description": "Invalid credentials"},
        403: {"description": "Account is deactivated"},
    },
)
async def login(
    body: LoginRequest,
    request: Request,
    auth_service: AuthService,
    session: DBSession,
) -> JSONResponse:
    try:
        user, tokens = await auth_service.login(body.identifier, body.password)
        await session.commit()
    except InvalidCredentialsError as e:
        await session.rollback()
        logger.info("Failed login attempt for %s", body.identifier)
        raise _unauthorized(e.message) from e
    except InactiveUserError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=e.message,
        ) from e

    data = {
        **_token_data(tokens),
        "user": UserResponseDTO.from_entity(user).to_dict(),
    }
    return envelope_response(
        status.HTTP_200_OK,
        request,
        data=data,
        message="Login successful",
    )


@router.post(
    "/refresh",
    summary="Exchange a refresh token for a new token pair",
    responses={
        200: {"description": "Tokens refreshed"},
        401: {"description": "Invalid or expired refresh token"},
    },
)
async def refresh(
    body: RefreshRequest,
    request: Request,
    auth_service: AuthService,
) -> JSONResponse:
    try:
        tokens = await auth_service.refresh(body.refresh_token)
    except InvalidTokenError as e:
        raise _unauthorized(e.message) from e

    return envelope_response(
        status.HTTP_200_OK,
        request,
        data=_token_data(tokens),
        message="Token refreshed successfully",
    )


@router.get(
    "/me",
    summary="Get the authenticated user",
    responses={
        200: {"description": "Current user profile with role slugs"},
        401: {"description": "Not authenticated"},
    },
)
async def me(
    request: Request,
    current_user: CurrentUser,
    user_repo: UserRepo,
) -> JSONResponse:
    user = await user_repo.find_by_id(current_user.user_id)
    if user is None:
        raise _unauthorized("User not found or inactive")

    data = UserResponseDTO.from_entity(
        user,
        roles=sorted(current_user.role_slugs),
    ).to_dict()
    return envelope_response(
        status.HTTP_200_OK,
        request,
        data=data,
        message="User retrieved successfully",
    )


@router.post(
    "/password-reset/request",
    summary="Request a password reset token",
    responses={
        200: {"description": "Always returned, whether or not the email exists"},
    },
)
async def request_password_reset(
    body: ForgotPasswordRequest,
    request: Request,
    auth_service: AuthService,
    session: DBSession,
) -> JSONResponse:
    await auth_service.request_password_reset(str(body.email))
    await session.commit()

    return envelope_response(
        status.HTTP_200_OK,
        request,
        message=PASSWORD_RESET_REQUESTED_MESSAGE,
    )


@router.post(
    "/password-reset/confirm",
    summary="Reset the password with a reset token",
    responses={
        200: {"description": "Password changed"},
        400: {"description": "Invalid or expired token, or weak password"},
    },
)
async def confirm_password_reset(
    body: ResetPasswordRequest,
    request: Request,
    auth_service: AuthService,
    session: DBSession,
) -> JSONResponse:
    try:
        await auth_service.reset_password(body.token, body.new_password)
        await session.commit()
    except (InvalidResetTokenError, WeakPasswordError) as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e

    return envelope_response(
        status.HTTP_200_OK,
        request,
        message="Password has been reset successfully",
    )
