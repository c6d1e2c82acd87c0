"""
Relay API Models

Pydantic models for the relay endpoint. Wire names follow the browser
client (camelCase); Python attributes are snake_case.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class RelayRequest(BaseModel):
    """Request to relay to the upstream exchange API.

    Every field is optional at the schema level; presence is checked by the
    relay itself so a missing key yields the relay's own error envelope.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    api_key: Optional[str] = Field(default=None, alias="apiKey", description="Exchange API key")
    secret_key: Optional[str] = Field(
        default=None,
        alias="secretKey",
        description="Exchange secret key, required for authenticated endpoints"
    )
    endpoint: Optional[str] = Field(default=None, description="Upstream path, e.g. /api/v3/account")
    params: Optional[Dict[str, Any]] = Field(default=None, description="Query parameters")

    def __repr__(self) -> str:
        # Credentials stay out of logs and tracebacks
        return f"RelayRequest(endpoint={self.endpoint!r}, params={self.params!r})"

    __str__ = __repr__


class ErrorResponse(BaseModel):
    """Error envelope returned by the relay."""
    error: str = Field(..., description="Error message")
    status: Optional[int] = Field(default=None, description="Status code reported by the upstream")
    timestamp: Optional[str] = Field(default=None, description="Time of an internal failure")


class RootResponse(BaseModel):
    """Root endpoint response."""
    status: str = Field(..., description="Server status")
    message: str = Field(..., description="Server description")
    timestamp: str = Field(..., description="Current server time")


class HealthResponse(BaseModel):
    """Health check response format."""
    status: str = Field(..., description="Service health status")
    uptime: float = Field(..., description="Seconds since process start")


# Export all models
__all__ = [
    "RelayRequest",
    "ErrorResponse",
    "RootResponse",
    "HealthResponse",
]
