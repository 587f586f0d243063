"""Client-side durable storage (the terminal's local storage)."""

from .base import (
    AUTH_TOKEN_KEY,
    DRAFT_INPUT_KEY,
    SAVED_CHATS_KEY,
    THEME_KEY,
    ClientStorage,
)
from .factory import create_client_storage
from .in_memory import InMemoryClientStorage
from .json_file import JSONFileClientStorage

__all__ = [
    "AUTH_TOKEN_KEY",
    "DRAFT_INPUT_KEY",
    "SAVED_CHATS_KEY",
    "THEME_KEY",
    "ClientStorage",
    "InMemoryClientStorage",
    "JSONFileClientStorage",
    "create_client_storage",
]
