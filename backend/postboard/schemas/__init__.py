from postboard.schemas.common import (
    ErrorResponse,
    HealthResponse,
    LoginRequest,
    MessageResponse,
    TokenResponse,
)
from postboard.schemas.post import Post, PostCreate, PostUpdate
from postboard.schemas.user import User, UserCreate, UserUpdate

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "TokenResponse",
    "Post",
    "PostCreate",
    "PostUpdate",
    "User",
    "UserCreate",
    "UserUpdate",
]
