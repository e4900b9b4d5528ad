from __future__ import annotations

from pydantic import Field

from app.schemas.common import CamelModel

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PASSWORD_PATTERN = r"^[a-zA-Z0-9!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]+$"


class UserCreate(CamelModel):
    username: str = Field(..., min_length=6, max_length=64, pattern=USERNAME_PATTERN)
    email: str = Field(..., max_length=256, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=128, pattern=PASSWORD_PATTERN)


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)


class PasswordChangeRequest(CamelModel):
    password: str = Field(..., min_length=1, max_length=128)


class UserRead(CamelModel):
    id: int
    username: str
    email: str
    is_admin: bool
