"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Message bubble rendering and per-message actions
- Incremental syncing of the chat view with a session
- Pinned-message preview
- Input history management
- Log rendering and level filtering
"""

from datetime import datetime

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, Checkbox, Input, RichLog, Select, Static, TextArea

from ..chat.config import MAX_TYPING_SPEED, MIN_TYPING_SPEED, TONES
from ..chat.models import Message as ChatMessage
from ..chat.models import Role, Session
from ..chat.pins import PinIndex
from ..chat.suggestions import get_suggestions
from .config import INPUT_HISTORY_MAX_SIZE, LOG_TIMESTAMP_FORMAT, PIN_PREVIEW_LENGTH, LogLevel


class MessageBubble(Vertical):
    """One chat turn with its action buttons.

    Assistant turns offer Copy, Pin and follow-up suggestions; user turns
    offer Edit & Re-run. Actions are reported to the app as messages.
    """

    class PinToggled(Message):
        """Posted when the user pins or unpins an assistant turn."""

        def __init__(self, message_id: str) -> None:
            super().__init__()
            self.message_id = message_id

    class EditRequested(Message):
        """Posted when the user wants to edit a user turn."""

        def __init__(self, message_id: str) -> None:
            super().__init__()
            self.message_id = message_id

    class SuggestionChosen(Message):
        """Posted when a follow-up suggestion is clicked."""

        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    def __init__(self, message: ChatMessage, pinned: bool = False) -> None:
        role_class = "user-message" if message.role == Role.USER else "assistant-message"
        super().__init__(classes=f"chat-message {role_class}")
        self._message_id = message.id
        self._role = message.role
        self._text = message.text
        self._pinned = pinned
        self._suggestions = self._suggest()
        self.set_class(pinned, "pinned")

    @property
    def message_id(self) -> str:
        return self._message_id

    @property
    def is_assistant(self) -> bool:
        return self._role == Role.ASSISTANT

    def _suggest(self) -> list[str]:
        return get_suggestions(self._text) if self.is_assistant else []

    def compose(self) -> ComposeResult:
        yield Static("Mentor" if self.is_assistant else "You", classes="message-header")
        yield Static(Text(self._text), classes="message-content")
        with Horizontal(classes="message-actions"):
            if self.is_assistant:
                yield Button("Copy", classes="copy-btn")
                yield Button("Unpin" if self._pinned else "Pin", classes="pin-btn")
            else:
                yield Button("Edit", classes="edit-btn").with_tooltip("Edit & Re-run")
        if self.is_assistant:
            with Horizontal(classes="message-suggestions"):
                for suggestion in self._suggestions:
                    yield Button(suggestion, name=suggestion, classes="suggestion-btn")

    def update_message(self, message: ChatMessage, pinned: bool) -> None:
        """Bring the bubble in line with the current message state."""
        if message.text != self._text:
            self._text = message.text
            for content in self.query(".message-content").results(Static):
                content.update(Text(self._text))
            suggestions = self._suggest()
            if suggestions != self._suggestions:
                self._suggestions = suggestions
                for row in self.query(".message-suggestions"):
                    row.remove_children()
                    row.mount(*[
                        Button(s, name=s, classes="suggestion-btn") for s in suggestions
                    ])

        if pinned != self._pinned:
            self._pinned = pinned
            self.set_class(pinned, "pinned")
            for button in self.query(".pin-btn").results(Button):
                button.label = "Unpin" if pinned else "Pin"

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button = event.button
        if button.has_class("copy-btn"):
            self.app.copy_to_clipboard(self._text)
            self.app.notify("Copied to clipboard", timeout=2)
        elif button.has_class("pin-btn"):
            self.post_message(self.PinToggled(self._message_id))
        elif button.has_class("edit-btn"):
            self.post_message(self.EditRequested(self._message_id))
        elif button.has_class("suggestion-btn") and button.name:
            self.post_message(self.SuggestionChosen(button.name))


class ChatView(VerticalScroll):
    """Scrollable conversation of the visible session.

    Bubbles are kept per message id so typing-effect updates only touch
    the bubble being revealed.
    """

    BORDER_TITLE = "Chat"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._session_id: str | None = None
        self._bubbles: dict[str, MessageBubble] = {}

    def show(self, session: Session, pins: PinIndex) -> None:
        """Render ``session``, reusing bubbles that are already on screen."""
        if session.id != self._session_id:
            self._session_id = session.id
            self._bubbles = {}
            self.remove_children()

        stale = dict(self._bubbles)
        new_bubbles = []
        for message in session.messages:
            bubble = stale.pop(message.id, None)
            pinned = pins.is_pinned(message.id)
            if bubble is None:
                bubble = MessageBubble(message, pinned=pinned)
                self._bubbles[message.id] = bubble
                new_bubbles.append(bubble)
            else:
                bubble.update_message(message, pinned)

        for message_id, bubble in stale.items():
            del self._bubbles[message_id]
            bubble.remove()

        if new_bubbles:
            self.mount(*new_bubbles)
        self.border_subtitle = f"{len(session.messages)} messages"
        self.call_after_refresh(self.scroll_end, animate=False)


class PinnedPanel(VerticalScroll):
    """Previews of the visible session's pinned replies."""

    def show(self, messages: list[ChatMessage]) -> None:
        self.remove_children()
        if not messages:
            self.mount(Static("No pins yet.", classes="pinned-empty"))
            return
        items = []
        for message in messages:
            preview = message.text
            if len(preview) > PIN_PREVIEW_LENGTH:
                preview = preview[:PIN_PREVIEW_LENGTH] + "..."
            items.append(Static(Text(preview), classes="pinned-item"))
        self.mount(*items)


class Sidebar(Vertical):
    """Navigation buttons and the pinned panel."""

    def compose(self) -> ComposeResult:
        yield Static("AI Mentor", id="sidebar-title")
        yield Button("+ New Tab", id="new-tab-btn", variant="primary")
        yield Button("New Chat", id="new-chat-btn")
        yield Button("Close Tab", id="close-tab-btn")
        yield Button("Saved", id="saved-btn")
        yield Button("Settings", id="settings-btn")
        yield Static("PINNED", id="pinned-title")
        yield PinnedPanel(id="pinned-panel")


class TopBar(Horizontal):
    """Session title, tone selector and session-level actions."""

    def __init__(self, tone: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._tone = tone

    def compose(self) -> ComposeResult:
        yield Static("Conversation", id="session-name")
        yield Select(
            [(tone, tone) for tone in TONES],
            value=self._tone,
            allow_blank=False,
            id="tone-select",
        )
        yield Button("Summarize", id="summarize-btn", variant="warning")
        yield Button("Save Chat", id="save-btn", variant="warning")

    def set_session_name(self, name: str) -> None:
        self.query_one("#session-name", Static).update(Text(name or "Conversation"))


class OptionsBar(Horizontal):
    """Typing-effect toggle and reveal speed."""

    def __init__(self, typing_effect: bool, typing_speed: int, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._typing_effect = typing_effect
        self._typing_speed = typing_speed

    def compose(self) -> ComposeResult:
        yield Checkbox("Typing effect", value=self._typing_effect, id="typing-checkbox")
        yield Static(f"Speed ({MIN_TYPING_SPEED}-{MAX_TYPING_SPEED}):")
        yield Input(str(self._typing_speed), type="integer", id="speed-input")


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._busy = False

    def compose(self) -> ComposeResult:
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Submit message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.focus()
        text_area.highlight_cursor_line = False

    @property
    def text(self) -> str:
        return self.query_one("#chat-input", TextArea).text

    @text.setter
    def text(self, value: str) -> None:
        self.query_one("#chat-input", TextArea).text = value

    def set_busy(self, busy: bool) -> None:
        """Disable sending while the visible session waits for a reply."""
        self._busy = busy
        self.query_one("#send-btn", Button).disabled = busy

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        if self._busy:
            return
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text
        if not value.strip():
            return
        if not self._history or self._history[-1] != value:
            self._history.append(value)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        text_area.text = ""
        self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped records from every mentor component.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.INFO, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (exchange, archive, http, ...)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        level_color = level_colors.get(min(level, LogLevel.ERROR), "white")
        component_colors = {
            "exchange": "green",
            "registry": "bright_green",
            "store": "magenta",
            "http": "blue",
            "provider": "bright_blue",
            "app": "cyan",
        }
        comp_color = component_colors.get(component, "white")

        self.write(
            Text.assemble(
                (timestamp, "dim"),
                " ",
                (f"{LogLevel.name(level):<5}", level_color),
                " ",
                (f"[{component}]", comp_color),
                " ",
                message,
            )
        )

    def info(self, component: str, message: str) -> None:
        """Log an INFO level message."""
        self.log(component, message, LogLevel.INFO)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True

    def get_plain_text(self) -> str:
        """Get plain text content of the log for copying."""
        return "\n".join(line.text for line in self.lines)

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = self.get_plain_text()
        if not text.strip():
            self.app.notify("Log is empty", timeout=2)
            return
        self.app.copy_to_clipboard(text)
        self.app.notify("Log copied", timeout=2)
