"""Account service orchestrating credential checks, persistence, and token issuance."""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

from .account import Account
from .contracts import (
    AccountStore,
    AuthStatus,
    CreateAccountInput,
    LoginInput,
    LoginResult,
    NewAccountRecord,
    UpdateAccountInput,
)
from ..errors import InternalError, NotFound, ServiceError, Unauthorized
from ..security.passwords import PasswordHasher
from ..security.tokens import TokenIssuer

F = TypeVar("F", bound=Callable[..., Any])

INVALID_CREDENTIALS = "Invalid credentials"


def _guarded(func: F) -> F:
    """Let known service errors through and collapse everything else to ``InternalError``."""

    @functools.wraps(func)
    def wrapper(self: "AccountService", *args: Any, **kwargs: Any) -> Any:
        try:
            return func(self, *args, **kwargs)
        except ServiceError:
            raise
        except Exception as exc:
            self._logger.exception("%s failed", func.__name__)
            raise InternalError() from exc

    return wrapper  # type: ignore[return-value]


class AccountService:
    """Account workflows over an injected store, hasher, and token issuer."""

    def __init__(
        self,
        repository: AccountStore,
        tokens: TokenIssuer,
        passwords: PasswordHasher,
        logger: logging.Logger | None = None,
    ) -> None:
        """Store dependencies used to orchestrate persistence and token issuance."""
        self._repository = repository
        self._tokens = tokens
        self._passwords = passwords
        self._logger = logger or logging.getLogger(__name__)

    @_guarded
    def login(self, payload: LoginInput) -> LoginResult:
        """Verify credentials and issue a token.

        Unknown email, inactive account and wrong password all raise the same
        ``Unauthorized`` error so callers cannot probe which emails exist.
        """
        self._logger.info("logging in user %s", payload.email)
        credentials = self._repository.find_by_email(payload.email)
        if credentials is None or not credentials.account.active:
            self._logger.warning("rejected login for %s", payload.email)
            raise Unauthorized(INVALID_CREDENTIALS)
        if not self._passwords.verify(payload.password, credentials.password_hash):
            self._logger.warning("rejected login for %s", payload.email)
            raise Unauthorized(INVALID_CREDENTIALS)

        account = credentials.account
        return LoginResult(user=account, token=self._tokens.issue(account.id))

    @_guarded
    def check_auth_status(self, account: Account) -> AuthStatus:
        """Re-issue a token for an account that already passed bearer validation."""
        return AuthStatus(
            email=account.email,
            username=account.username,
            token=self._tokens.issue(account.id),
        )

    @_guarded
    def create_account(self, payload: CreateAccountInput) -> Account:
        """Register an account; the role is always ``user``."""
        self._logger.info("creating user %s", payload.username)
        record = NewAccountRecord(
            username=payload.username,
            email=payload.email,
            password_hash=self._passwords.hash(payload.password),
        )
        return self._repository.create(record)

    @_guarded
    def list_accounts(self) -> list[Account]:
        self._logger.info("listing active users")
        return self._repository.list_active()

    @_guarded
    def get_account(self, account_id: str) -> Account:
        self._logger.info("finding user %s", account_id)
        return self._require_active(account_id)

    @_guarded
    def update_account(self, account_id: str, payload: UpdateAccountInput) -> Account:
        """Apply a partial update to an active account."""
        self._logger.info("updating user %s", account_id)
        self._require_active(account_id)

        fields: dict[str, Any] = {}
        if payload.username is not None:
            fields["username"] = payload.username
        if payload.email is not None:
            fields["email"] = payload.email
        if payload.password:
            fields["password_hash"] = self._passwords.hash(payload.password)
        return self._repository.update(account_id, fields)

    @_guarded
    def soft_delete(self, account_id: str) -> Account:
        """Deactivate an account. Deactivating it again raises ``NotFound``."""
        self._logger.info("removing user %s", account_id)
        self._require_active(account_id)
        return self._repository.update(account_id, {"active": False})

    def _require_active(self, account_id: str) -> Account:
        account = self._repository.find_by_id(account_id, active_only=True)
        if account is None:
            raise NotFound(f'User with ID "{account_id}" not found')
        return account
