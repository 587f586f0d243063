"""Saved-chat archive.

The archive is a list of frozen session snapshots kept in client
storage under a single key. Every mutation rewrites the whole
collection; there are no incremental updates.
"""

import json
import logging

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..chat.models import ArchiveEntry, Message, Session
from ..errors import MalformedArchive
from ..storage.base import SAVED_CHATS_KEY, ClientStorage

logger = logging.getLogger(__name__)

_ENTRIES = TypeAdapter(list[ArchiveEntry])


class ArchiveStore:
    """Named snapshots of sessions, persisted to client storage."""

    def __init__(self, storage: ClientStorage):
        self._storage = storage
        self._entries: list[ArchiveEntry] = self._read()

    @property
    def entries(self) -> list[ArchiveEntry]:
        """Saved chats in save order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, entry_id: str) -> ArchiveEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def _read(self) -> list[ArchiveEntry]:
        raw = self._storage.get_item(SAVED_CHATS_KEY)
        if not raw:
            return []
        try:
            return _ENTRIES.validate_json(raw)
        except PydanticValidationError as e:
            logger.warning("Ignoring unreadable saved chats: %s", e)
            return []

    def _persist(self) -> None:
        payload = json.dumps(
            [entry.model_dump(mode="json") for entry in self._entries],
            ensure_ascii=False,
        )
        self._storage.set_item(SAVED_CHATS_KEY, payload)

    def save(self, session: Session) -> ArchiveEntry | None:
        """Snapshot a session.

        Later edits to the session do not reach the snapshot.

        Returns:
            The new entry, or None when the session has no messages
        """
        if not session.messages:
            return None
        entry = ArchiveEntry(
            name=session.name,
            messages=[m.model_copy(deep=True) for m in session.messages],
        )
        self._entries.append(entry)
        self._persist()
        logger.info("Saved chat %r (%d messages)", entry.name, len(entry.messages))
        return entry

    def load(self, entry_id: str) -> tuple[str, list[Message]] | None:
        """Return copies of a saved chat's name and messages."""
        entry = self.get(entry_id)
        if entry is None:
            return None
        return entry.name, [m.model_copy(deep=True) for m in entry.messages]

    def rename(self, entry_id: str, new_name: str) -> bool:
        """Rename a saved chat. A blank name keeps the current one."""
        entry = self.get(entry_id)
        if entry is None:
            return False
        if new_name.strip():
            entry.name = new_name
        self._persist()
        return True

    def delete(self, entry_id: str) -> bool:
        """Remove a single saved chat."""
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.id != entry_id]
        if len(self._entries) == before:
            return False
        self._persist()
        return True

    def clear_all(self) -> None:
        """Forget every saved chat and erase the stored collection."""
        self._entries = []
        self._storage.remove_item(SAVED_CHATS_KEY)
        logger.info("Cleared all saved chats")

    def export_all(self) -> bytes:
        """Serialize every saved chat as a pretty-printed JSON array."""
        payload = [entry.model_dump(mode="json") for entry in self._entries]
        return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")

    def import_all(self, data: bytes | str) -> int:
        """Replace the whole archive with the contents of a backup.

        This discards every saved chat currently held.

        Args:
            data: JSON text of an exported archive

        Returns:
            Number of imported entries

        Raises:
            MalformedArchive: If the payload is not a JSON array of entries
                with distinct ids. The current archive is left untouched.
        """
        try:
            parsed = json.loads(data)
        except ValueError as e:
            raise MalformedArchive(f"Invalid JSON: {e}") from e
        if not isinstance(parsed, list):
            raise MalformedArchive("Invalid backup format")
        try:
            entries = _ENTRIES.validate_python(parsed)
        except PydanticValidationError as e:
            raise MalformedArchive(f"Invalid backup format: {e.error_count()} bad field(s)") from e
        ids = [entry.id for entry in entries]
        if len(set(ids)) != len(ids):
            raise MalformedArchive("Invalid backup format: duplicate chat ids")

        self._entries = entries
        self._persist()
        logger.info("Imported %d saved chats", len(entries))
        return len(entries)
