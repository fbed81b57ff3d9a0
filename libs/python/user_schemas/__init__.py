"""Shared schema exports."""

from .account import Role, UserAuthStatus, UserLoginResponse, UserResponse
from .requests import CreateUserRequest, LoginUserRequest, UpdateUserRequest

__all__ = [
    "CreateUserRequest",
    "LoginUserRequest",
    "Role",
    "UpdateUserRequest",
    "UserAuthStatus",
    "UserLoginResponse",
    "UserResponse",
]
