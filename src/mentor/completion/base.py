"""Abstract completion service.

The exchange protocol only needs one operation: turn a prompt into a
reply. This module hides whether that goes through the mentor server or
straight to an LLM provider.
"""

from abc import ABC, abstractmethod
from typing import Any


class CompletionService(ABC):
    """Turns a prompt into response text.

    Implementations raise ``CompletionError`` with a human-readable message
    on any transport or upstream failure and never retry.
    """

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Return the reply for ``prompt``."""

    async def close(self) -> None:
        """Release any open connections."""

    async def __aenter__(self) -> "CompletionService":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
