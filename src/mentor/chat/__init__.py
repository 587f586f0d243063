"""Chat session state for the mentor client.

Provides sessions, pins and the exchange protocol that talks to the
completion service.
"""

from .exchange import ExchangeProtocol, ExchangeSettings, SessionStatus, build_prompt
from .models import ArchiveEntry, Message, Role, Session
from .pins import PinIndex
from .registry import SessionRegistry
from .suggestions import get_suggestions

__all__ = [
    "ArchiveEntry",
    "ExchangeProtocol",
    "ExchangeSettings",
    "Message",
    "PinIndex",
    "Role",
    "Session",
    "SessionRegistry",
    "SessionStatus",
    "build_prompt",
    "get_suggestions",
]
