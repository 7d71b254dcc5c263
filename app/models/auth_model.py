# /app/models/auth_model.py

from typing import Optional

from pydantic import Field

from ..core.principal import Role
from .base_model import ApiModel


class RegisterRequest(ApiModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    role: Role = Field(default=Role.STUDENT, description="Self-registration accepts STUDENT or PARENT only.")


class UserCreate(RegisterRequest):
    """Admin-side user creation; any role is allowed."""
    pass


class LoginRequest(ApiModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserPublic(ApiModel):
    id: int
    username: str
    email: str
    role: Role


class LoginResponse(ApiModel):
    token: str
    user: UserPublic


class UserSummary(ApiModel):
    id: int
    username: str
    role: Optional[Role] = None
