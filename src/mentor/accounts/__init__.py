"""User accounts: storage, credential checks and the HTTP client."""

from .base import AccountStore
from .client import AccountClient
from .factory import create_account_store
from .models import Account
from .service import AccountService

__all__ = [
    "Account",
    "AccountClient",
    "AccountService",
    "AccountStore",
    "create_account_store",
]
