"""
User-related schemas.

Pydantic models for signup, login and user responses.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fieldtrack.shared.constants import UserRole, DEFAULT_SIGNUP_ROLE


class SignupRequest(BaseModel):
    """Signup payload."""

    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=20)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    role: UserRole = DEFAULT_SIGNUP_ROLE

    @field_validator("name", "phone")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("invalid email address")
        return v

    @field_validator("role", mode="before")
    @classmethod
    def upper_role(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class LoginRequest(BaseModel):
    """Login payload."""

    email: str
    password: str


class UserResponse(BaseModel):
    """Public view of a user (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    phone: str
    email: str
    role: str
    state: Optional[str] = None
    district: Optional[str] = None
    assigned_regions: Optional[List[str]] = None


class TokenResponse(BaseModel):
    """Login response."""

    token: str
    role: str
    user: UserResponse


class SignupResponse(BaseModel):
    message: str
