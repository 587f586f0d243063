"""Data models for chat sessions.

These models define messages, live sessions and archived snapshots,
independent of how the client renders them or where archives are stored.
A ``Session`` doubles as the message store: its methods are the only
way the exchange protocol touches the conversation.
"""

from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator
from uuid_extensions import uuid7


def new_message_id() -> str:
    """Generate a message id unique for the life of the client."""
    return uuid4().hex


def new_session_id() -> str:
    """Generate a session id."""
    return uuid4().hex


def new_archive_id() -> str:
    """Generate a time-ordered, collision-resistant archive entry id."""
    return str(uuid7())


class Role(str, Enum):
    """Author of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single chat turn."""

    id: str = Field(default_factory=new_message_id, description="Opaque unique token")
    role: Role = Field(description="Who wrote the turn")
    text: str = Field(default="", description="UTF-8 message text")

    @field_validator("role", mode="before")
    @classmethod
    def _normalise_role(cls, value: Any) -> Any:
        # Archives written by the browser client call assistant turns "ai"
        if value == "ai":
            return Role.ASSISTANT
        return value

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value


class Session(BaseModel):
    """One open conversation (a tab).

    Messages are kept in conversation order. The sequence is append-only
    except for in-place text replacement.
    """

    id: str = Field(default_factory=new_session_id)
    name: str = Field(default="Chat 1")
    messages: list[Message] = Field(default_factory=list)

    def append(self, message: Message) -> Message:
        """Add a message to the end of the conversation.

        Args:
            message: The message to add

        Returns:
            The appended message
        """
        self.messages.append(message)
        return message

    def find(self, message_id: str) -> Message | None:
        """Return the message with ``message_id`` or None."""
        for message in self.messages:
            if message.id == message_id:
                return message
        return None

    def replace_text(self, message_id: str, new_text: str) -> bool:
        """Replace a message's text, keeping its id and role.

        Args:
            message_id: Id of the message to update
            new_text: Replacement text

        Returns:
            True if a message was updated, False if the id is unknown
        """
        message = self.find(message_id)
        if message is None:
            return False
        message.text = new_text
        return True

    def following(self, message_id: str) -> Message | None:
        """Return the message directly after ``message_id``, if any."""
        for index, message in enumerate(self.messages):
            if message.id == message_id:
                if index + 1 < len(self.messages):
                    return self.messages[index + 1]
                return None
        return None

    def transcript(self, separator: str = "\n") -> str:
        """Render the conversation as ``role: text`` lines."""
        return separator.join(f"{m.role.value}: {m.text}" for m in self.messages)


class ArchiveEntry(BaseModel):
    """A named, frozen copy of a session's messages (a saved chat)."""

    id: str = Field(default_factory=new_archive_id)
    name: str
    messages: list[Message] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Entries exported by the browser client carry millisecond timestamps
        if isinstance(value, int):
            return str(value)
        return value

    def transcript(self, separator: str = "\n\n") -> str:
        """Render the saved conversation as ``role: text`` paragraphs."""
        return separator.join(f"{m.role.value}: {m.text}" for m in self.messages)
