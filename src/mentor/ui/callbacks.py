"""Logging integration for the TUI.

Hides the details of how log records reach the log panel.
Uses thread-safe methods to update UI from worker threads.
"""

import logging
import threading
from typing import TYPE_CHECKING, Any

from .config import LOG_MAX_MESSAGE_LENGTH

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import DebugPanel


class PanelLogHandler(logging.Handler):
    """Route ``mentor`` log records to the TUI log panel.

    The component shown in the panel is the last part of the logger name,
    so ``mentor.chat.exchange`` appears as ``[exchange]``.
    """

    def __init__(self, panel: "DebugPanel", app: "App | None" = None) -> None:
        super().__init__()
        self.panel = panel
        self.app = app

    def _call_thread_safe(self, func: Any, *args: Any, **kwargs: Any) -> None:
        """Call a function in a thread-safe manner for UI updates."""
        if self.app is not None and self.app._thread_id != threading.get_ident():
            self.app.call_from_thread(func, *args, **kwargs)
        else:
            func(*args, **kwargs)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
            if len(message) > LOG_MAX_MESSAGE_LENGTH:
                message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."
            component = record.name.rsplit(".", 1)[-1]
            self._call_thread_safe(self.panel.log, component, message, record.levelno)
        except Exception:
            self.handleError(record)
