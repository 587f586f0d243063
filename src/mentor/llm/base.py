from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, LLMResponse


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    This module hides the design decision of which hosted model answers
    the mentor's prompts. Implementations handle:
    - API client setup and authentication
    - Request/response format conversion
    - Provider-specific quirks (empty replies, safety filtering)

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            response = await provider.chat_completion(messages)
    """

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion.

        Args:
            messages: Conversation so far
            model: Model to use (None uses provider's default)
            temperature: Sampling temperature (0.0 to 2.0)
            max_tokens: Maximum tokens to generate
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse containing generated content and metadata
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model name."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Suppresses "Event loop is closed" errors raised by httpx/anyio
        during interpreter shutdown.
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
