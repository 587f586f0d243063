"""Main Textual TUI application.

Orchestrates the UI components and routes user interaction to the session
registry, the exchange protocol and the archive.
"""

import asyncio
import logging
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Checkbox, Footer, Header, Input, Select, Static, Tab, Tabs, TextArea

from ..archive import ArchiveStore
from ..chat import ExchangeProtocol, ExchangeSettings, PinIndex, SessionRegistry
from ..completion import CompletionService
from ..storage import DRAFT_INPUT_KEY, THEME_KEY, ClientStorage
from .callbacks import PanelLogHandler
from .config import LogLevel
from .screens import CLEAR_ALL, TOGGLE_THEME, EditMessageScreen, SavedChatsScreen, SettingsScreen
from .styles import APP_CSS
from .themes import THEMES, resolve_theme, toggled_theme
from .widgets import (
    ChatInputBar,
    ChatView,
    DebugPanel,
    MessageBubble,
    OptionsBar,
    PinnedPanel,
    Sidebar,
    TopBar,
)

logger = logging.getLogger(__name__)

TAB_PREFIX = "tab-"


def _tab_id(session_id: str) -> str:
    return f"{TAB_PREFIX}{session_id}"


class MentorApp(App):
    """Textual TUI for the AI Mentor chat client."""

    CSS = APP_CSS
    TITLE = "AI Mentor"

    # Priority bindings win over the chat input, which binds some of these keys itself
    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "new_tab", "New Tab", priority=True),
        Binding("ctrl+w", "close_tab", "Close Tab", priority=True),
        Binding("ctrl+n", "new_chat", "New Chat", priority=True),
        Binding("ctrl+s", "save_chat", "Save", priority=True),
        Binding("ctrl+o", "saved_chats", "Saved", priority=True),
        Binding("ctrl+u", "summarize", "Summarize", priority=True),
        Binding("ctrl+g", "settings", "Settings", priority=True),
        Binding("ctrl+b", "toggle_sidebar", "Sidebar", priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        completion: CompletionService,
        storage: ClientStorage,
        export_dir: str | Path = "./exports",
        log_level: str | None = None,
        settings: ExchangeSettings | None = None,
    ) -> None:
        super().__init__()
        self._completion = completion
        self._storage = storage
        self._export_dir = Path(export_dir)
        self._log_level = log_level
        self.registry = SessionRegistry()
        self.pins = PinIndex()
        self.archive = ArchiveStore(storage)
        self.exchange = ExchangeProtocol(
            self.registry,
            completion,
            settings=settings,
            on_change=self._on_session_changed,
        )
        self._theme_name = resolve_theme(storage.get_item(THEME_KEY))
        self._log_handler: PanelLogHandler | None = None

    def compose(self) -> ComposeResult:
        settings = self.exchange.settings
        yield Header(show_clock=True)
        with Horizontal(id="body"):
            yield Sidebar(id="sidebar")
            with Vertical(id="main"):
                yield Tabs(
                    *[Tab(s.name, id=_tab_id(s.id)) for s in self.registry.sessions],
                    id="session-tabs",
                )
                yield TopBar(settings.tone, id="top-bar")
                yield ChatView(id="chat-view")
                yield Static("Mentor is thinking...", id="pending-indicator")
                yield Static("", id="error-banner")
                yield ChatInputBar(id="chat-input-bar")
                yield OptionsBar(settings.typing_effect, settings.typing_speed, id="options-bar")
                yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        for theme in THEMES.values():
            self.register_theme(theme)
        self._apply_theme(self._theme_name, persist=False)

        log_panel = self.query_one("#debug-panel", DebugPanel)
        level = LogLevel.from_string(self._log_level) if self._log_level else LogLevel.INFO
        log_panel.log_level = level
        self._log_handler = PanelLogHandler(log_panel, app=self)
        mentor_logger = logging.getLogger("mentor")
        mentor_logger.addHandler(self._log_handler)
        mentor_logger.setLevel(level)
        if self._log_level is not None:
            log_panel.show()
            log_panel.info("app", f"Log panel enabled with level: {self._log_level.upper()}")

        self.sub_title = f"{len(self.archive)} saved chats"

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        draft = self._storage.get_item(DRAFT_INPUT_KEY)
        if draft:
            input_bar.text = draft
        input_bar.focus_input()
        self._refresh_view()

    def on_unmount(self) -> None:
        """Detach the log handler when the app exits."""
        if self._log_handler is not None:
            logging.getLogger("mentor").removeHandler(self._log_handler)
            self._log_handler = None

    # View state

    def _on_session_changed(self, session_id: str) -> None:
        if not self.is_running:
            return
        if session_id == self.registry.active_id:
            self._refresh_view()

    def _refresh_view(self) -> None:
        """Re-render everything that depends on the visible session."""
        session = self.registry.active
        status = self.exchange.status_of(session.id)

        self.query_one("#chat-view", ChatView).show(session, self.pins)
        self.query_one("#top-bar", TopBar).set_session_name(session.name)
        self.query_one("#pinned-panel", PinnedPanel).show(self.pins.pinned_in(session))

        self.query_one("#pending-indicator", Static).set_class(status.pending, "-visible")
        banner = self.query_one("#error-banner", Static)
        banner.update(status.error or "")
        banner.set_class(status.error is not None, "-visible")

        self.query_one("#chat-input-bar", ChatInputBar).set_busy(status.pending)
        self.query_one("#close-tab-btn", Button).disabled = len(self.registry) <= 1

    def _apply_theme(self, name: str, persist: bool = True) -> None:
        self._theme_name = resolve_theme(name)
        self.theme = THEMES[self._theme_name].name
        if persist:
            self._storage.set_item(THEME_KEY, self._theme_name)

    def _relabel_tab(self, session_id: str, name: str) -> None:
        for tab in self.query(f"#{_tab_id(session_id)}").results(Tab):
            tab.label = name

    # Exchange workers

    @work(group="exchange")
    async def _send(self, text: str, session_id: str) -> None:
        try:
            await self.exchange.send(text, session_id)
        except Exception as e:
            logger.exception("Send failed")
            self.notify(f"Error: {str(e)[:50]}", severity="error", timeout=5)

    @work(group="exchange")
    async def _rerun(self, message_id: str, new_text: str) -> None:
        try:
            await self.exchange.edit_and_regenerate(message_id, new_text)
        except Exception as e:
            logger.exception("Re-run failed")
            self.notify(f"Error: {str(e)[:50]}", severity="error", timeout=5)

    @work(group="exchange")
    async def _summarize(self, session_id: str) -> None:
        try:
            if not await self.exchange.summarize(session_id):
                self.notify("Nothing to summarize", severity="warning", timeout=2)
        except Exception as e:
            logger.exception("Summarize failed")
            self.notify(f"Error: {str(e)[:50]}", severity="error", timeout=5)

    # Events

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._send(event.value, self.registry.active_id)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id != "chat-input":
            return
        text = event.text_area.text
        if text:
            self._storage.set_item(DRAFT_INPUT_KEY, text)
        else:
            self._storage.remove_item(DRAFT_INPUT_KEY)

    def on_message_bubble_pin_toggled(self, event: MessageBubble.PinToggled) -> None:
        self.pins.toggle(event.message_id)
        self._refresh_view()

    def on_message_bubble_edit_requested(self, event: MessageBubble.EditRequested) -> None:
        session = self.registry.owner_of(event.message_id)
        message = session.find(event.message_id) if session else None
        if message is None:
            return
        message_id = message.id

        def on_edited(new_text: str | None) -> None:
            if new_text is not None and new_text.strip():
                self._rerun(message_id, new_text)

        self.push_screen(EditMessageScreen(message.text), on_edited)

    def on_message_bubble_suggestion_chosen(self, event: MessageBubble.SuggestionChosen) -> None:
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.text = event.text
        input_bar.focus_input()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        if event.tab is None or not event.tab.id:
            return
        session_id = event.tab.id.removeprefix(TAB_PREFIX)
        if session_id != self.registry.active_id and self.registry.set_active(session_id):
            logger.debug("Switched to session %s", session_id)
        self._refresh_view()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "tone-select" and isinstance(event.value, str):
            self.exchange.settings.tone = event.value

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        if event.checkbox.id == "typing-checkbox":
            self.exchange.settings.typing_effect = event.value

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "speed-input":
            return
        try:
            speed = int(event.value)
        except ValueError:
            return
        self.exchange.settings.set_typing_speed(speed)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "speed-input":
            event.input.value = str(self.exchange.settings.typing_speed)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {
            "new-tab-btn": self.action_new_tab,
            "new-chat-btn": self.action_new_chat,
            "close-tab-btn": self.action_close_tab,
            "saved-btn": self.action_saved_chats,
            "settings-btn": self.action_settings,
            "summarize-btn": self.action_summarize,
            "save-btn": self.action_save_chat,
        }
        action = actions.get(event.button.id or "")
        if action is None:
            return
        event.stop()
        result = action()
        if asyncio.iscoroutine(result):
            await result

    # Actions

    async def action_new_tab(self) -> None:
        """Open a new session in its own tab and show it."""
        session = self.registry.create_session()
        tabs = self.query_one("#session-tabs", Tabs)
        await tabs.add_tab(Tab(session.name, id=_tab_id(session.id)))
        tabs.active = _tab_id(session.id)

    async def action_close_tab(self) -> None:
        """Close the visible session unless it is the last one."""
        closing_id = self.registry.active_id
        if not self.registry.close_session(closing_id):
            self.notify("The last tab cannot be closed", severity="warning", timeout=2)
            return
        tabs = self.query_one("#session-tabs", Tabs)
        await tabs.remove_tab(_tab_id(closing_id))
        tabs.active = _tab_id(self.registry.active_id)
        self._refresh_view()

    def action_new_chat(self) -> None:
        """Empty the visible session."""
        self.registry.clear_messages(self.registry.active_id)
        self._refresh_view()

    def action_save_chat(self) -> None:
        entry = self.archive.save(self.registry.active)
        if entry is None:
            self.notify("Nothing to save", severity="warning", timeout=2)
            return
        self.sub_title = f"{len(self.archive)} saved chats"
        self.notify(f"Saved '{entry.name}'", timeout=2)

    def action_summarize(self) -> None:
        self._summarize(self.registry.active_id)

    def action_saved_chats(self) -> None:
        """Open the saved chats browser; a chosen entry replaces the visible session."""

        def on_closed(entry_id: str | None) -> None:
            self.sub_title = f"{len(self.archive)} saved chats"
            if entry_id is None:
                return
            loaded = self.archive.load(entry_id)
            if loaded is None:
                return
            name, messages = loaded
            session_id = self.registry.active_id
            self.registry.install(session_id, name, messages)
            self._relabel_tab(session_id, name)
            self._refresh_view()
            self.notify(f"Loaded '{name}'", timeout=2)

        self.push_screen(SavedChatsScreen(self.archive, self._export_dir), on_closed)

    def action_settings(self) -> None:
        def on_closed(choice: str | None) -> None:
            if choice is None:
                return
            if choice == CLEAR_ALL:
                self.archive.clear_all()
                self.sub_title = "0 saved chats"
                self.notify("All saved chats deleted", timeout=2)
            elif choice == TOGGLE_THEME:
                self._apply_theme(toggled_theme(self._theme_name))
            else:
                self._apply_theme(choice)

        self.push_screen(SettingsScreen(self._theme_name), on_closed)

    def action_toggle_sidebar(self) -> None:
        self.query_one("#sidebar", Sidebar).toggle_class("-collapsed")

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_mentor_tui(
    completion: CompletionService,
    storage: ClientStorage,
    export_dir: str | Path = "./exports",
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        completion: Completion service answering user turns
        storage: Client storage holding saved chats, draft and theme
        export_dir: Directory receiving TXT/PDF exports and backups
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = MentorApp(
        completion=completion,
        storage=storage,
        export_dir=export_dir,
        log_level=log_level,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await completion.close()
