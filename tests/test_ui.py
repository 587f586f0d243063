"""Tests for the Textual chat client."""
import pytest
from textual.widgets import Tabs

from conftest import FakeCompletion
from mentor.chat import ExchangeSettings
from mentor.storage import DRAFT_INPUT_KEY, SAVED_CHATS_KEY, THEME_KEY, InMemoryClientStorage
from mentor.ui import ChatInputBar, MentorApp, MessageBubble


def _app(storage=None, completion=None) -> MentorApp:
    return MentorApp(
        completion=completion or FakeCompletion("Hi there!"),
        storage=storage or InMemoryClientStorage(),
        settings=ExchangeSettings(typing_effect=False),
    )


async def _send(app, pilot, text: str) -> None:
    app.query_one(ChatInputBar).post_message(ChatInputBar.Submitted(text))
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


class TestMentorApp:
    """Tests for MentorApp interaction flow."""

    @pytest.mark.asyncio
    async def test_send_shows_both_turns(self):
        """Test that a submitted message and its reply are rendered."""
        app = _app()
        async with app.run_test() as pilot:
            await _send(app, pilot, "Hello")

            assert [m.text for m in app.registry.active.messages] == ["Hello", "Hi there!"]
            assert len(app.query(MessageBubble)) == 2

    @pytest.mark.asyncio
    async def test_new_and_close_tab(self):
        """Test opening a tab activates it and closing returns to the first."""
        app = _app()
        async with app.run_test() as pilot:
            first = app.registry.active_id

            await pilot.press("ctrl+t")
            await pilot.pause(0.1)
            assert len(app.registry) == 2
            assert app.registry.active_id != first
            assert app.registry.active.name == "Chat 2"

            await pilot.press("ctrl+w")
            await pilot.pause(0.1)
            assert len(app.registry) == 1
            assert app.registry.active_id == first
            assert app.query_one(Tabs).active == f"tab-{first}"

    @pytest.mark.asyncio
    async def test_last_tab_stays_open(self):
        """Test that the last tab cannot be closed."""
        app = _app()
        async with app.run_test() as pilot:
            await pilot.press("ctrl+w")
            await pilot.pause(0.1)
            assert len(app.registry) == 1

    @pytest.mark.asyncio
    async def test_save_chat(self):
        """Test that saving persists the visible session."""
        storage = InMemoryClientStorage()
        app = _app(storage)
        async with app.run_test() as pilot:
            await _send(app, pilot, "Hello")
            await pilot.press("ctrl+s")
            await pilot.pause()

            assert len(app.archive) == 1
            assert storage.get_item(SAVED_CHATS_KEY)

    @pytest.mark.asyncio
    async def test_failed_send_shows_banner(self):
        """Test that a failed call keeps the user turn and shows the error."""
        app = _app(completion=FakeCompletion(error="down"))
        async with app.run_test() as pilot:
            await _send(app, pilot, "Hello")

            assert [m.text for m in app.registry.active.messages] == ["Hello"]
            assert app.query_one("#error-banner").has_class("-visible")

    @pytest.mark.asyncio
    async def test_draft_and_theme_restored(self):
        """Test that the saved draft and theme are applied on start."""
        storage = InMemoryClientStorage({DRAFT_INPUT_KEY: "unsent", THEME_KEY: "Aurora"})
        app = _app(storage)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.query_one(ChatInputBar).text == "unsent"
            assert app.theme == "mentor-aurora"
