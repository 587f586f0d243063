"""Completion service that calls an LLM provider directly."""

import logging

from ..errors import CompletionError
from ..llm import ChatMessage, LLMProvider
from .base import CompletionService

logger = logging.getLogger(__name__)


class ProviderCompletionService(CompletionService):
    """Sends each prompt as a single-turn conversation to an LLM provider.

    Used by the server's ``/api/ask`` endpoint and by the client in
    direct mode (no server in between).
    """

    def __init__(self, llm: LLMProvider, temperature: float = 0.7):
        self._llm = llm
        self._temperature = temperature

    @property
    def llm(self) -> LLMProvider:
        return self._llm

    async def complete(self, prompt: str) -> str:
        try:
            response = await self._llm.chat_completion(
                [ChatMessage(role="user", content=prompt)],
                temperature=self._temperature,
            )
        except Exception as e:
            logger.exception("LLM provider call failed")
            raise CompletionError(str(e) or e.__class__.__name__) from e
        return response.content

    async def close(self) -> None:
        await self._llm.close()
