"""Role request schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CreateRoleBody(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Inventory Clerk",
                "description": "Counts and moves stock",
            },
        },
    )


class UpdateRoleBody(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
