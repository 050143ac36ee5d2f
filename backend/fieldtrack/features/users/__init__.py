"""
User management module.

Usage:
    from fieldtrack.features.users import User, UserRepository

Models:
- User: Field officer, admin or plain user with email/password auth

Repositories:
- UserRepository: Data access for users
"""

from .models import User
from .schemas import (
    SignupRequest,
    SignupResponse,
    LoginRequest,
    TokenResponse,
    UserResponse,
)
from .repository import UserRepository
from .security import (
    InvalidToken,
    hash_password,
    verify_password,
    create_access_token,
    decode_access_token,
)

__all__ = [
    # Models
    "User",
    # Schemas
    "SignupRequest",
    "SignupResponse",
    "LoginRequest",
    "TokenResponse",
    "UserResponse",
    # Repositories
    "UserRepository",
    # Security
    "InvalidToken",
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
]
