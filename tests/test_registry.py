"""Unit tests for the session registry."""
import pytest

from mentor.chat import Message, Role, SessionRegistry


class TestSessionRegistry:
    """Tests for opening, closing and switching sessions."""

    def test_starts_with_one_active_session(self, registry):
        """Test the initial state: one empty session named Chat 1."""
        assert len(registry) == 1
        assert registry.active.name == "Chat 1"
        assert registry.active.messages == []

    def test_create_does_not_activate(self, registry):
        """Test that a new session is appended but not activated."""
        first = registry.active_id
        created = registry.create_session()

        assert registry.active_id == first
        assert registry.sessions[-1] is created
        assert created.messages == []

    def test_default_names_count_open_sessions(self, registry):
        """Test that new sessions are named Chat N."""
        second = registry.create_session()
        third = registry.create_session()
        named = registry.create_session("Custom")

        assert second.name == "Chat 2"
        assert third.name == "Chat 3"
        assert named.name == "Custom"

    def test_ids_are_unique(self, registry):
        """Test that session ids never collide."""
        for _ in range(20):
            registry.create_session()
        ids = [s.id for s in registry.sessions]
        assert len(set(ids)) == len(ids)

    def test_close_active_selects_first_remaining(self, registry):
        """Test closing the active session activates the first remaining one."""
        first = registry.active
        second = registry.create_session()
        third = registry.create_session()
        registry.set_active(third.id)

        assert registry.close_session(third.id) is True
        assert registry.active_id == first.id
        assert [s.id for s in registry.sessions] == [first.id, second.id]

    def test_close_inactive_keeps_selection(self, registry):
        """Test closing another session leaves the active one alone."""
        first = registry.active
        second = registry.create_session()

        assert registry.close_session(second.id) is True
        assert registry.active_id == first.id

    def test_close_last_session_is_refused(self, registry):
        """Test that the registry never becomes empty."""
        only = registry.active_id

        assert registry.close_session(only) is False
        assert len(registry) == 1
        assert registry.active_id == only

    def test_close_unknown_session(self, registry):
        """Test that closing an unknown id is a no-op."""
        registry.create_session()
        assert registry.close_session("missing") is False
        assert len(registry) == 2

    def test_set_active_unknown_is_noop(self, registry):
        """Test that activating an unknown id changes nothing."""
        active = registry.active_id
        assert registry.set_active("missing") is False
        assert registry.active_id == active

    def test_clear_messages_keeps_id_and_name(self, registry):
        """Test that clearing empties the conversation only."""
        session = registry.active
        session.append(Message(role=Role.USER, text="hi"))

        assert registry.clear_messages(session.id) is True
        assert registry.active.messages == []
        assert registry.active.id == session.id
        assert registry.active.name == "Chat 1"

    def test_rename(self, registry):
        """Test renaming a session."""
        assert registry.rename(registry.active_id, "Python help") is True
        assert registry.active.name == "Python help"

    def test_install_copies_messages(self, registry):
        """Test that installed messages are copies of the given ones."""
        messages = [Message(role=Role.USER, text="hi")]
        registry.install(registry.active_id, "Loaded", messages)

        messages[0].text = "changed"
        assert registry.active.name == "Loaded"
        assert registry.active.messages[0].text == "hi"

    def test_owner_of(self, registry):
        """Test finding the session that holds a message."""
        other = registry.create_session()
        message = other.append(Message(role=Role.USER, text="hi"))

        assert registry.owner_of(message.id) is other
        assert registry.owner_of("missing") is None

    def test_custom_first_name(self):
        """Test naming the initial session."""
        assert SessionRegistry(first_name="Welcome").active.name == "Welcome"

    def test_dangling_active_id_raises(self, registry):
        """Test that an active id with no open session is reported."""
        registry._active_id = "gone"

        with pytest.raises(RuntimeError, match="gone"):
            registry.active
