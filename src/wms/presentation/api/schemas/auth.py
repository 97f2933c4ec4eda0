"""Authentication schemas for request/response models."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    """Request schema for user login."""

    identifier: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "identifier": "alice01",
                "password": "Str0ng!Pass",
            },
        },
    )


class RefreshRequest(BaseModel):
    """Request schema for token refresh."""

    refresh_token: str = Field(..., min_length=1)


class ForgotPasswordRequest(BaseModel):
    """Request schema for requesting a password reset token."""

    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Request schema for resetting a password with a token."""

    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = Field(default="bearer")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
