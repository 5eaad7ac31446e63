"""
Response Schemas

Pydantic models for the bodies this proxy produces itself. Upstream payloads
are relayed as raw bytes and never parsed, so they have no schema here.

Models:
    - HealthResponse: body of GET /health
    - ErrorResponse: envelope for every locally generated error
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class HealthResponse(BaseModel):
    """Liveness probe body."""

    status: str = Field(default="ok", examples=["ok"])


class ErrorResponse(BaseModel):
    """
    Error envelope.

    `details` is only set for proxy-side failures (timeouts, network errors,
    unexpected exceptions) and carries the underlying error text.

    Example:
        {
            "error": "Failed to fetch from Binance API",
            "details": "timeout of 30s exceeded"
        }
    """

    error: str = Field(..., description="Human-readable error summary")
    details: Optional[str] = Field(default=None, description="Underlying failure text")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Failed to fetch from Bybit API",
                "details": "[Errno -2] Name or service not known"
            }
        }
    )
