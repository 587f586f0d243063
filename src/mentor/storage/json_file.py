"""JSON file client storage.

Keeps every key in a single JSON object on disk. The file is read once
when the store is created and rewritten in full after each mutation.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from .base import ClientStorage

logger = logging.getLogger(__name__)


class JSONFileClientStorage(ClientStorage):
    """Key-value store persisted to a JSON file."""

    def __init__(self, path: str | Path = "~/.ai-mentor/storage.json"):
        self._path = Path(path).expanduser()
        self._items: dict[str, str] = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: top level is not an object", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self) -> None:
        """Atomically rewrite the backing file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._items, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._flush()

    def remove_item(self, key: str) -> None:
        if key in self._items:
            del self._items[key]
            self._flush()

    def keys(self) -> list[str]:
        return list(self._items)

    @property
    def backend_type(self) -> str:
        return "json"
