"""Abstract base class for client-side key-value storage.

This is the terminal client's counterpart of browser local storage.
The abstraction hides:
- Storage format and location
- When bytes actually reach the disk

Values are plain strings; callers serialize structured data themselves.
Every write is applied immediately (last writer wins, no locking).
"""

from abc import ABC, abstractmethod

# Keys used by the client
SAVED_CHATS_KEY = "savedChats"
DRAFT_INPUT_KEY = "draftInput"
THEME_KEY = "appTheme"
AUTH_TOKEN_KEY = "authToken"


class ClientStorage(ABC):
    """Durable string key-value store."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value or None."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``. Missing keys are ignored."""

    @abstractmethod
    def keys(self) -> list[str]:
        """All stored keys."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
