"""Registry of open chat sessions (tabs).

Hides how sessions are ordered and how the active selection moves when
tabs open and close. Exactly one session is active at any time and the
registry never becomes empty.
"""

import logging

from .config import FIRST_SESSION_NAME
from .models import Message, Session

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Ordered set of open sessions with a single active selection."""

    def __init__(self, first_name: str = FIRST_SESSION_NAME) -> None:
        first = Session(name=first_name)
        self._sessions: list[Session] = [first]
        self._active_id = first.id

    @property
    def sessions(self) -> list[Session]:
        """Open sessions in tab order."""
        return list(self._sessions)

    @property
    def active_id(self) -> str:
        return self._active_id

    @property
    def active(self) -> Session:
        """The session currently shown to the user."""
        session = self.get(self._active_id)
        if session is None:
            raise RuntimeError(f"Active session {self._active_id} is not open")
        return session

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return any(s.id == session_id for s in self._sessions)

    def get(self, session_id: str) -> Session | None:
        """Return the session with ``session_id`` or None."""
        for session in self._sessions:
            if session.id == session_id:
                return session
        return None

    def next_default_name(self) -> str:
        """Default name for a new tab (``Chat N``)."""
        return f"Chat {len(self._sessions) + 1}"

    def create_session(self, default_name: str | None = None) -> Session:
        """Open a new, empty session without activating it.

        Args:
            default_name: Tab name (``Chat N`` when omitted)

        Returns:
            The new session
        """
        session = Session(name=default_name or self.next_default_name())
        self._sessions.append(session)
        logger.debug("Created session %s (%s)", session.id, session.name)
        return session

    def close_session(self, session_id: str) -> bool:
        """Close a session.

        Closing the active session activates the first remaining one.
        The last remaining session cannot be closed.

        Returns:
            True if the session was removed
        """
        if session_id not in self:
            return False
        if len(self._sessions) == 1:
            logger.debug("Refusing to close the last session %s", session_id)
            return False

        self._sessions = [s for s in self._sessions if s.id != session_id]
        if self._active_id == session_id:
            self._active_id = self._sessions[0].id
        logger.debug("Closed session %s, active is %s", session_id, self._active_id)
        return True

    def set_active(self, session_id: str) -> bool:
        """Activate a session. Unknown ids are ignored."""
        if session_id not in self:
            return False
        self._active_id = session_id
        return True

    def clear_messages(self, session_id: str) -> bool:
        """Empty a session's conversation, keeping its id and name."""
        session = self.get(session_id)
        if session is None:
            return False
        session.messages = []
        return True

    def rename(self, session_id: str, new_name: str) -> bool:
        """Rename a session."""
        session = self.get(session_id)
        if session is None:
            return False
        session.name = new_name
        return True

    def install(self, session_id: str, name: str, messages: list[Message]) -> bool:
        """Overwrite a session's name and messages with copies of the given ones.

        Used when a saved chat is loaded into a tab. Whatever the session
        held before is discarded.
        """
        session = self.get(session_id)
        if session is None:
            return False
        session.name = name
        session.messages = [m.model_copy(deep=True) for m in messages]
        return True

    def owner_of(self, message_id: str) -> Session | None:
        """Return the open session that currently holds ``message_id``."""
        for session in self._sessions:
            if session.find(message_id) is not None:
                return session
        return None
