"""User response DTOs shared across services."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    user = "user"
    admin = "admin"


class UserResponse(BaseModel):
    """Sanitized user projection; never carries a password field."""

    model_config = ConfigDict(use_enum_values=True)

    id: str
    username: str
    email: str
    role: Role
    active: bool
    created_at: datetime
    updated_at: datetime


class UserLoginResponse(BaseModel):
    user: UserResponse
    token: str


class UserAuthStatus(BaseModel):
    email: str
    username: str
    token: str
