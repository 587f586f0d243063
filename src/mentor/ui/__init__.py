"""Terminal UI module for AI Mentor.

Provides a Textual-based chat client.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (message bubbles, tabs content, input, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- screens.py: Modal dialogs (confirmation, edit, saved chats, settings)
- callbacks.py: Logging integration (how records reach the log panel)
- app.py: Application orchestration (user interaction flow)
"""

from .app import MentorApp, run_mentor_tui
from .callbacks import PanelLogHandler
from .config import LogLevel
from .widgets import ChatInputBar, ChatView, DebugPanel, MessageBubble

__all__ = [
    "ChatInputBar",
    "ChatView",
    "DebugPanel",
    "LogLevel",
    "MentorApp",
    "MessageBubble",
    "PanelLogHandler",
    "run_mentor_tui",
]
