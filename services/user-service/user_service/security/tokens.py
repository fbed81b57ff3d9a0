"""Utilities for issuing and validating application JWTs."""

from __future__ import annotations

import time
from typing import Any

import jwt

from ..errors import Unauthenticated


class TokenIssuer:
    """Mint and verify signed, time-bound tokens carrying an account id."""

    def __init__(self, secret: str, ttl_seconds: int, algorithm: str = "HS256") -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._ttl_seconds = ttl_seconds
        self._algorithm = algorithm

    def issue(self, account_id: str) -> str:
        """Create a signed JWT for *account_id*.

        Parameters
        ----------
        account_id:
            Account identifier embedded as the ``id`` claim.

        Returns
        -------
        str
            The encoded token. ``iat`` and ``exp`` are the only other claims.
        """

        now = int(time.time())
        payload: dict[str, Any] = {
            "id": account_id,
            "iat": now,
            "exp": now + self._ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """Decode and verify a JWT returning its payload.

        Raises
        ------
        Unauthenticated
            When the signature or expiry check fails, or the payload carries
            no account id.
        """

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise Unauthenticated("Token has expired") from exc
        except jwt.PyJWTError as exc:
            raise Unauthenticated("Token not valid") from exc

        if not isinstance(payload.get("id"), str) or not payload["id"]:
            raise Unauthenticated("Token not valid")
        return payload
