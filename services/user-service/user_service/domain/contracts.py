"""Domain-level request contracts and the store interface shared by multiple layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from .account import Account, AccountCredentials, Role


@dataclass(slots=True)
class CreateAccountInput:
    """Validated inputs required to register an account."""

    username: str
    email: str
    password: str


@dataclass(slots=True)
class LoginInput:
    email: str
    password: str


@dataclass(slots=True)
class UpdateAccountInput:
    """Partial update; ``None`` means the field was not supplied."""

    username: str | None = None
    email: str | None = None
    password: str | None = None


@dataclass(slots=True)
class NewAccountRecord:
    """Row values handed to the store on creation; the password is already hashed."""

    username: str
    email: str
    password_hash: str
    role: Role = Role.user


@dataclass(slots=True)
class LoginResult:
    user: Account
    token: str


@dataclass(slots=True)
class AuthStatus:
    email: str
    username: str
    token: str


class AccountStore(Protocol):
    """Record-access contract the account service depends on."""

    def find_by_email(self, email: str) -> AccountCredentials | None: ...

    def find_by_id(self, account_id: str, active_only: bool = True) -> Account | None: ...

    def list_active(self) -> list[Account]: ...

    def create(self, record: NewAccountRecord) -> Account: ...

    def update(self, account_id: str, fields: dict[str, Any]) -> Account: ...
