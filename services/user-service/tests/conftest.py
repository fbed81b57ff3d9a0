from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from user_service.api import routes
from user_service.api.errors import register_exception_handlers
from user_service.domain.account import Account, AccountCredentials
from user_service.domain.contracts import NewAccountRecord
from user_service.domain.service import AccountService
from user_service.security.bearer import BearerAuthenticator
from user_service.security.passwords import PasswordHasher
from user_service.security.tokens import TokenIssuer

TEST_SECRET = "test-secret"


class FakeRepository:
    """In-memory repository mimicking Postgres-backed behaviors."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self.password_hashes: dict[str, str] = {}
        self.fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def find_by_email(self, email: str) -> AccountCredentials | None:
        self._check()
        for account in self._accounts.values():
            if account.email == email:
                return AccountCredentials(
                    account=replace(account),
                    password_hash=self.password_hashes[account.id],
                )
        return None

    def find_by_id(self, account_id: str, active_only: bool = True) -> Account | None:
        self._check()
        account = self._accounts.get(account_id)
        if account is None or (active_only and not account.active):
            return None
        return replace(account)

    def list_active(self) -> list[Account]:
        self._check()
        return [replace(account) for account in self._accounts.values() if account.active]

    def create(self, record: NewAccountRecord) -> Account:
        self._check()
        if any(account.email == record.email for account in self._accounts.values()):
            raise RuntimeError('duplicate key value violates unique constraint "users_email_key"')
        now = datetime.now(timezone.utc)
        account = Account(
            id=str(uuid.uuid4()),
            username=record.username,
            email=record.email,
            role=record.role,
            active=True,
            created_at=now,
            updated_at=now,
        )
        self._accounts[account.id] = account
        self.password_hashes[account.id] = record.password_hash
        return replace(account)

    def update(self, account_id: str, fields: dict[str, Any]) -> Account:
        self._check()
        account = self._accounts[account_id]
        changes = dict(fields)
        if "password_hash" in changes:
            self.password_hashes[account_id] = changes.pop("password_hash")
        updated = replace(account, **changes, updated_at=datetime.now(timezone.utc))
        self._accounts[account_id] = updated
        return replace(updated)


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def tokens() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, ttl_seconds=3600)


@pytest.fixture
def service(repository, tokens) -> AccountService:
    # low work factor keeps the suite fast; the default is covered in test_passwords
    return AccountService(repository, tokens, PasswordHasher(rounds=4))


@pytest.fixture
def authenticator(repository, tokens) -> BearerAuthenticator:
    return BearerAuthenticator(tokens, repository)


@pytest.fixture
def api_client(service, authenticator):
    """Provide a FastAPI test client with isolated state."""
    app = FastAPI()
    app.include_router(routes.router)
    register_exception_handlers(app)
    app.state.account_service = service
    app.state.authenticator = authenticator

    with TestClient(app) as client:
        yield client
