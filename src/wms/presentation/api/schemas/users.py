"""User request schemas.

Field rules (lengths, formats, password strength) are enforced by the
use cases so that every violation is reported in one response; the
schemas only describe the payload shape.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateUserBody(BaseModel):
    username: Optional[str] = Field(None, description="3-50 letters, digits, . _ -")
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    language: Optional[str] = None
    time_zone: Optional[str] = None
    is_active: bool = True

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice01",
                "email": "Alice@Example.com",
                "first_name": "Alice",
                "last_name": "Smith",
                "password": "Str0ng!Pass",
            },
        },
    )


class UpdateUserBody(BaseModel):
    """Partial update. Omitted fields are left unchanged; ``""`` clears optional ones."""

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


class AssignRolesBody(BaseModel):
    role_ids: list[str] = Field(default_factory=list)
