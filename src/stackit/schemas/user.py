"""User-related Pydantic schemas."""

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=3, max_length=30)
    email: str = Field(..., max_length=320)
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Usernames are limited to letters, digits and underscores."""
        if not _USERNAME_PATTERN.match(v):
            raise ValueError("Username may only contain letters, numbers and underscores")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize and validate the email address."""
        v = v.strip().lower()
        if not _EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public account information; never includes the password hash."""

    id: int
    username: str
    email: str
    role: str
    is_banned: bool
    reputation: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthorSummary(BaseModel):
    """Compact author block embedded in questions and answers."""

    id: int
    username: str
    reputation: int

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type (always 'bearer')")
    user: UserResponse


class UserAdminUpdate(BaseModel):
    """Admin-only changes to another account."""

    is_banned: bool | None = None
    role: Literal["guest", "user", "admin"] | None = None
