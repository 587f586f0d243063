"""SQLite account store.

Persists accounts in a SQLite database file using aiosqlite.
"""

from datetime import datetime
from pathlib import Path

import aiosqlite

from ..errors import AccountExists
from .base import AccountStore
from .models import Account


class SQLiteAccountStore(AccountStore):
    """SQLite-backed account storage."""

    def __init__(self, path: str | Path = "./mentor_accounts.db"):
        self._db_path = Path(path)
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database and create the schema."""
        if self._connection is not None:
            return
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS accounts (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                email TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        """)
        await self._connection.commit()

    async def disconnect(self) -> None:
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def find_by_email(self, email: str) -> Account | None:
        async with self._connection.execute(
            "SELECT id, name, email, password_hash, created_at FROM accounts WHERE email = ?",
            (email,)
        ) as cursor:
            row = await cursor.fetchone()

        if row is None:
            return None

        account_id, name, email_db, password_hash, created_at = row
        return Account(
            id=account_id,
            name=name,
            email=email_db,
            password_hash=password_hash,
            created_at=datetime.fromisoformat(created_at),
        )

    async def create(self, account: Account) -> Account:
        try:
            await self._connection.execute("""
                INSERT INTO accounts (id, name, email, password_hash, created_at)
                VALUES (?, ?, ?, ?, ?)
            """, (
                account.id,
                account.name,
                account.email,
                account.password_hash,
                account.created_at.isoformat(),
            ))
        except aiosqlite.IntegrityError as e:
            raise AccountExists() from e
        await self._connection.commit()
        return account

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
