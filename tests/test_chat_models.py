"""Unit tests for chat data models."""
import pytest
from pydantic import ValidationError

from mentor.chat import ArchiveEntry, Message, Role, Session
from mentor.chat.models import new_archive_id


class TestMessage:
    """Tests for Message model."""

    def test_ids_are_unique(self):
        """Test that generated message ids never repeat."""
        ids = {Message(role=Role.USER, text="x").id for _ in range(200)}
        assert len(ids) == 200

    def test_legacy_ai_role_is_assistant(self):
        """Test that the browser client's "ai" role maps to assistant."""
        message = Message.model_validate({"id": "1", "role": "ai", "text": "hello"})
        assert message.role == Role.ASSISTANT

    def test_integer_id_becomes_string(self):
        """Test that numeric ids from old archives are kept as strings."""
        message = Message.model_validate({"id": 1700000000000, "role": "user", "text": "hi"})
        assert message.id == "1700000000000"

    def test_unknown_role_fails(self):
        """Test that an unknown role is rejected."""
        with pytest.raises(ValidationError):
            Message(role="system", text="x")


class TestSession:
    """Tests for Session message operations."""

    def test_append_keeps_order(self):
        """Test that appended messages stay in conversation order."""
        session = Session()
        first = session.append(Message(role=Role.USER, text="one"))
        second = session.append(Message(role=Role.ASSISTANT, text="two"))

        assert [m.id for m in session.messages] == [first.id, second.id]

    def test_replace_text_keeps_id_and_role(self):
        """Test that replacing text leaves id, role and length alone."""
        session = Session()
        reply = session.append(Message(role=Role.ASSISTANT, text="old"))

        assert session.replace_text(reply.id, "new") is True
        assert len(session.messages) == 1
        assert session.messages[0].id == reply.id
        assert session.messages[0].role == Role.ASSISTANT
        assert session.messages[0].text == "new"

    def test_replace_text_unknown_id(self):
        """Test that replacing an unknown id changes nothing."""
        session = Session()
        session.append(Message(role=Role.USER, text="hi"))

        assert session.replace_text("missing", "new") is False
        assert session.messages[0].text == "hi"

    def test_following(self):
        """Test lookup of the message after a given one."""
        session = Session()
        question = session.append(Message(role=Role.USER, text="q"))
        answer = session.append(Message(role=Role.ASSISTANT, text="a"))

        assert session.following(question.id) is answer
        assert session.following(answer.id) is None
        assert session.following("missing") is None

    def test_transcript(self):
        """Test that the transcript is role-prefixed lines."""
        session = Session()
        session.append(Message(role=Role.USER, text="Hello"))
        session.append(Message(role=Role.ASSISTANT, text="Hi there!"))

        assert session.transcript() == "user: Hello\nassistant: Hi there!"


class TestArchiveEntry:
    """Tests for ArchiveEntry model."""

    def test_default_ids_are_unique(self):
        """Test that generated archive ids never repeat."""
        ids = {new_archive_id() for _ in range(50)}
        assert len(ids) == 50

    def test_browser_export_is_accepted(self):
        """Test importing an entry written by the browser client."""
        entry = ArchiveEntry.model_validate({
            "id": 1700000000000,
            "name": "Old chat",
            "messages": [
                {"id": 1, "role": "user", "text": "hi"},
                {"id": 2, "role": "ai", "text": "hello"},
            ],
        })

        assert entry.id == "1700000000000"
        assert [m.role for m in entry.messages] == [Role.USER, Role.ASSISTANT]

    def test_transcript_uses_blank_lines(self):
        """Test that archive transcripts separate turns with a blank line."""
        entry = ArchiveEntry(
            name="c",
            messages=[Message(role=Role.USER, text="a"), Message(role=Role.ASSISTANT, text="b")],
        )
        assert entry.transcript() == "user: a\n\nassistant: b"
