"""Resolve ``Authorization: Bearer`` headers to live accounts."""

from __future__ import annotations

import logging

from ..domain.account import Account
from ..domain.contracts import AccountStore
from ..errors import InternalError, ServiceError, Unauthenticated
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)


def extract_token(authorization: str | None) -> str:
    """Return the token part of a ``Bearer <token>`` header value."""
    if not authorization:
        raise Unauthenticated("Missing or malformed bearer token")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise Unauthenticated("Missing or malformed bearer token")
    return parts[1]


class BearerAuthenticator:
    """Validate bearer tokens and re-read the account they point at.

    Every call goes back to the store, so an account deactivated after its
    token was issued stops authenticating immediately.
    """

    def __init__(self, tokens: TokenIssuer, repository: AccountStore) -> None:
        self._tokens = tokens
        self._repository = repository

    def validate(self, authorization: str | None) -> Account:
        token = extract_token(authorization)
        payload = self._tokens.decode(token)
        try:
            account = self._repository.find_by_id(payload["id"], active_only=False)
        except ServiceError:
            raise
        except Exception as exc:
            logger.exception("account lookup failed during token validation")
            raise InternalError() from exc

        if account is None:
            logger.warning("token references unknown account %s", payload["id"])
            raise Unauthenticated("Token not valid")
        if not account.active:
            logger.warning("token presented for inactive account %s", account.id)
            raise Unauthenticated("User is inactive, talk with an admin")
        return account
