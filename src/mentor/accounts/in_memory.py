"""In-memory account store. Data is lost when the server exits."""

from ..errors import AccountExists
from .base import AccountStore
from .models import Account


class InMemoryAccountStore(AccountStore):
    """Dict-based account storage, suitable for tests."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}

    async def connect(self) -> None:
        """No-op for in-memory storage."""

    async def disconnect(self) -> None:
        """No-op for in-memory storage."""

    async def find_by_email(self, email: str) -> Account | None:
        return self._accounts.get(email)

    async def create(self, account: Account) -> Account:
        if account.email in self._accounts:
            raise AccountExists()
        self._accounts[account.email] = account
        return account

    @property
    def backend_type(self) -> str:
        return "memory"
