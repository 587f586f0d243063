"""Abstract base class for account storage backends.

The abstraction hides:
- Storage engine (in-memory, SQLite)
- Connection management
"""

from abc import ABC, abstractmethod

from .models import Account


class AccountStore(ABC):
    """Persistence for registered accounts, keyed by email."""

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the backend gracefully."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Account | None:
        """Return the account registered under ``email``."""

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Store a new account.

        Raises:
            AccountExists: If the email is already registered
        """

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
