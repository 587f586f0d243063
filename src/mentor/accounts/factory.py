"""Factory for creating account storage backends."""

from typing import Any

from .base import AccountStore


def create_account_store(
    backend: str = "sqlite",
    **kwargs: Any
) -> AccountStore:
    """Create an account storage backend.

    Args:
        backend: Backend type ("memory" or "sqlite")
        **kwargs: Backend-specific configuration

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryAccountStore
        return InMemoryAccountStore(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteAccountStore
        return SQLiteAccountStore(**kwargs)

    raise ValueError(
        f"Unsupported account backend: {backend}. "
        f"Supported backends: memory, sqlite"
    )
