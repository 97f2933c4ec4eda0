"""Common schemas shared across API endpoints."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResponseMeta(BaseModel):
    timestamp: datetime = Field(..., description="When the response was produced (UTC)")
    correlation_id: Optional[str] = Field(
        None,
        description="Echo of the X-Correlation-ID request header",
    )
    pagination: Optional[dict[str, Any]] = None


class Envelope(BaseModel):
    """Shape shared by every JSON response."""

    success: bool
    data: Optional[Any] = None
    message: Optional[str] = None
    errors: Optional[list[str]] = None
    meta: ResponseMeta

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "User not found",
                "meta": {"timestamp": "2024-01-01T12:00:00+00:00"},
            },
        },
    )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    api_versions: list[str] = Field(default_factory=list)
