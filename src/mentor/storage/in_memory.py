"""In-memory client storage.

Data is lost when the application exits. Suitable for tests.
"""

from .base import ClientStorage


class InMemoryClientStorage(ClientStorage):
    """Dict-backed key-value store."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)

    @property
    def backend_type(self) -> str:
        return "memory"
