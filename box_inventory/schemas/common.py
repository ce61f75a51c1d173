"""
Common response schemas for consistent API structure.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format."""
    model_config = ConfigDict(from_attributes=True)

    error: str = Field(..., description="Error message", json_schema_extra={"example": "Validation failed"})
    details: Any | None = Field(None, description="Additional error details", json_schema_extra={"example": [{"field": "capacity", "message": "must be greater than 0"}]})
    code: str | None = Field(None, description="Machine-readable error code", json_schema_extra={"example": "CAPACITY_EXCEEDED"})


class ConfirmQuerySchema(BaseModel):
    """Query parameters for confirmation-gated destructive operations."""

    confirm: bool = Field(
        default=False,
        description="Must be true to perform the irreversible operation",
        json_schema_extra={"example": True},
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status", json_schema_extra={"example": "alive"})
    ready: bool = Field(..., description="Whether the service is ready", json_schema_extra={"example": True})
