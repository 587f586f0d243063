"""Factory for creating client storage backends."""

from typing import Any

from .base import ClientStorage


def create_client_storage(
    backend: str = "json",
    **kwargs: Any
) -> ClientStorage:
    """Create a client storage backend.

    Args:
        backend: Backend type ("memory" or "json")
        **kwargs: Backend-specific configuration

    Returns:
        ClientStorage instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryClientStorage
        return InMemoryClientStorage(**kwargs)

    elif backend == "json":
        from .json_file import JSONFileClientStorage
        return JSONFileClientStorage(**kwargs)

    raise ValueError(
        f"Unsupported storage backend: {backend}. "
        f"Supported backends: memory, json"
    )
