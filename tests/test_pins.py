"""Unit tests for the pin index."""
from hypothesis import given
from hypothesis import strategies as st

from mentor.chat import Message, PinIndex, Role, Session


class TestPinIndex:
    """Tests for toggling and listing pins."""

    def test_toggle_pins_then_unpins(self):
        """Test that toggling twice restores the original state."""
        pins = PinIndex()

        assert pins.toggle("m1") is True
        assert pins.is_pinned("m1")
        assert pins.toggle("m1") is False
        assert not pins.is_pinned("m1")

    @given(st.integers(min_value=0, max_value=20))
    def test_membership_follows_toggle_parity(self, toggles: int):
        """Property test: pinned exactly when toggled an odd number of times."""
        pins = PinIndex()
        for _ in range(toggles):
            pins.toggle("m1")
        assert pins.is_pinned("m1") == (toggles % 2 == 1)

    @given(st.lists(st.sampled_from(["a", "b", "c"]), max_size=30))
    def test_toggles_are_independent(self, sequence: list[str]):
        """Property test: toggling one id never affects another."""
        pins = PinIndex()
        for message_id in sequence:
            pins.toggle(message_id)
        for message_id in ["a", "b", "c"]:
            assert (message_id in pins) == (sequence.count(message_id) % 2 == 1)

    def test_pinned_in_lists_assistant_turns_in_order(self):
        """Test that only pinned assistant turns of the session are listed."""
        session = Session()
        question = session.append(Message(role=Role.USER, text="q"))
        first = session.append(Message(role=Role.ASSISTANT, text="a1"))
        session.append(Message(role=Role.ASSISTANT, text="a2"))
        third = session.append(Message(role=Role.ASSISTANT, text="a3"))

        pins = PinIndex()
        pins.toggle(third.id)
        pins.toggle(first.id)
        pins.toggle(question.id)

        assert pins.pinned_in(session) == [first, third]

    def test_pins_of_other_sessions_are_hidden(self):
        """Test that pins from another session are not listed."""
        visible, other = Session(), Session()
        reply = other.append(Message(role=Role.ASSISTANT, text="elsewhere"))

        pins = PinIndex()
        pins.toggle(reply.id)

        assert pins.pinned_in(visible) == []
        assert len(pins) == 1
