"""
PostBoard Backend: Shared Request/Response Schemas
==================================================

What:  Pydantic models for the auth demo routes, the uniform error envelope
       and the health check.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def required_value(value: Any) -> Any:
    """
    Before-validator for create bodies: a present attribute must be truthy.

    0, 0.0 and false count as missing; other numbers and true become their
    JSON text ("5551234", "true"). Strings and everything else pass through
    to the field's own validation.
    """
    if isinstance(value, bool):
        if not value:
            raise ValueError("value is required")
        return "true"
    if isinstance(value, (int, float)):
        if not value or value != value:
            raise ValueError("value is required")
        return str(value)
    return value


class MessageResponse(BaseModel):
    message: str = Field(description="Human-readable outcome")


class LoginRequest(BaseModel):
    """
    POST /test-routes/login body.

    Both fields default to None so that a missing field is a failed login
    (401), not a schema error.
    """

    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str = Field(description="Shared secret to send in the authorization header")


class ErrorResponse(BaseModel):
    """
    Uniform failure envelope produced by the Error Boundary.

    Example:
        {
            "message": "Something went wrong!",
            "error": "Intentional failure for testing the error boundary",
            "request_id": "1f2e3d4c"
        }
    """

    message: str = Field(description="Fixed failure message")
    error: str = Field(description="Descriptive error string (redacted when configured)")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    store_backend: str = Field(description="memory or database")
    database: str = Field(description="connected, disconnected or not_configured")
    users: Optional[int] = Field(default=None, description="Stored user count")
    posts: Optional[int] = Field(default=None, description="Stored post count")
    uptime_seconds: float = Field(description="Seconds since service started")
