"""
AI Mentor: a multi-session chat client for an LLM-backed mentor service.

Each subpackage hides one design decision: chat state and the exchange
protocol, saved-chat archives, client storage, completion services,
accounts, the HTTP server and the terminal UI.
"""

__version__ = "0.1.0"

from .archive import ArchiveStore
from .chat import (
    ArchiveEntry,
    ExchangeProtocol,
    ExchangeSettings,
    Message,
    PinIndex,
    Role,
    Session,
    SessionRegistry,
)
from .completion import CompletionService, HTTPCompletionService, ProviderCompletionService
from .errors import CompletionError, MalformedArchive, MentorError

__all__ = [
    "ArchiveEntry",
    "ArchiveStore",
    "CompletionError",
    "CompletionService",
    "ExchangeProtocol",
    "ExchangeSettings",
    "HTTPCompletionService",
    "MalformedArchive",
    "MentorError",
    "Message",
    "PinIndex",
    "ProviderCompletionService",
    "Role",
    "Session",
    "SessionRegistry",
]
