from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    user = "user"
    admin = "admin"


@dataclass(slots=True)
class Account:
    """Sanitized view of a stored user; the password hash never lives here."""

    id: str
    username: str
    email: str
    role: Role
    active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class AccountCredentials:
    """An account paired with its stored password hash, used only by login."""

    account: Account
    password_hash: str
