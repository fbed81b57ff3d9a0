"""Database repository for user account data."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from psycopg import sql
from psycopg.rows import tuple_row
from psycopg_pool import ConnectionPool

from .domain.account import Account, AccountCredentials, Role
from .domain.contracts import NewAccountRecord

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    username TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    role TEXT NOT NULL DEFAULT 'user' CHECK (role IN ('user', 'admin')),
    active BOOLEAN NOT NULL DEFAULT TRUE,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""

# Sanitized projection; the password column is only read by find_by_email.
_PUBLIC_COLUMNS = "id, username, email, role, active, created_at, updated_at"

# Maps updatable field names to their column.
_UPDATABLE_COLUMNS = {
    "username": "username",
    "email": "email",
    "password_hash": "password",
    "active": "active",
}


class AccountRepository:
    """Postgres-backed implementation of the account store contract."""

    def __init__(self, pool: ConnectionPool) -> None:
        """Store the connection pool used for all database interactions."""
        self._pool = pool

    def ensure_schema(self) -> None:
        """Create the ``users`` table when it does not exist yet."""
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
            conn.commit()

    def find_by_email(self, email: str) -> AccountCredentials | None:
        """Return the account and its password hash for an exact email match."""
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_PUBLIC_COLUMNS}, password
                    FROM users
                    WHERE email = %s
                    """,
                    (email,),
                )
                row = cur.fetchone()
        if not row:
            return None
        return AccountCredentials(account=self._map_record(row[:7]), password_hash=row[7])

    def find_by_id(self, account_id: str, active_only: bool = True) -> Account | None:
        """Fetch an account by id, optionally ignoring deactivated ones."""
        query = f"SELECT {_PUBLIC_COLUMNS} FROM users WHERE id = %s"
        if active_only:
            query += " AND active"
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(query, (account_id,))
                row = cur.fetchone()
        if not row:
            return None
        return self._map_record(row)

    def list_active(self) -> list[Account]:
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_PUBLIC_COLUMNS}
                    FROM users
                    WHERE active
                    ORDER BY created_at, id
                    """
                )
                rows = cur.fetchall()
        return [self._map_record(row) for row in rows]

    def create(self, record: NewAccountRecord) -> Account:
        """Insert a new account row and return its sanitized projection."""
        account_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO users (id, username, email, password, role, active, created_at, updated_at)
                    VALUES (%s, %s, %s, %s, %s, TRUE, %s, %s)
                    RETURNING {_PUBLIC_COLUMNS}
                    """,
                    (
                        account_id,
                        record.username,
                        record.email,
                        record.password_hash,
                        record.role.value,
                        now,
                        now,
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        return self._map_record(row)

    def update(self, account_id: str, fields: dict[str, Any]) -> Account:
        """Overwrite the supplied fields and bump ``updated_at``.

        Raises
        ------
        KeyError
            If *fields* names something that is not updatable.
        LookupError
            If no row has the given id.
        """
        assignments = [
            sql.SQL("{} = %s").format(sql.Identifier(_UPDATABLE_COLUMNS[name]))
            for name in fields
        ]
        assignments.append(sql.SQL("updated_at = %s"))
        params: list[Any] = [*fields.values(), datetime.now(timezone.utc), account_id]

        query = sql.SQL(
            "UPDATE users SET {assignments} WHERE id = %s RETURNING " + _PUBLIC_COLUMNS
        ).format(assignments=sql.SQL(", ").join(assignments))

        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(query, params)
                row = cur.fetchone()
            conn.commit()
        if not row:
            raise LookupError(f"account {account_id} does not exist")
        return self._map_record(row)

    def _map_record(self, row: tuple) -> Account:
        """Convert a raw database tuple into the domain ``Account`` dataclass."""
        return Account(
            id=row[0],
            username=row[1],
            email=row[2],
            role=Role(row[3]),
            active=row[4],
            created_at=row[5],
            updated_at=row[6],
        )
