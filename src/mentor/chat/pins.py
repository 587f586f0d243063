"""Pinned message index.

Pins are a side-set of message ids, independent of which session holds
the message. The set lives in memory only and is lost on restart.
"""

from .models import Message, Role, Session


class PinIndex:
    """Set of pinned message ids."""

    def __init__(self) -> None:
        self._ids: set[str] = set()

    def toggle(self, message_id: str) -> bool:
        """Flip membership of ``message_id``.

        Returns:
            True if the message is pinned after the call
        """
        if message_id in self._ids:
            self._ids.discard(message_id)
            return False
        self._ids.add(message_id)
        return True

    def is_pinned(self, message_id: str) -> bool:
        return message_id in self._ids

    def pinned_in(self, session: Session) -> list[Message]:
        """Pinned assistant messages of ``session`` in conversation order."""
        return [
            m for m in session.messages
            if m.role == Role.ASSISTANT and m.id in self._ids
        ]

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._ids
