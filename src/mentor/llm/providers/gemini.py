"""Google Gemini LLM provider.

Uses the official Google GenAI SDK for async generation.
Gemini occasionally returns empty candidates (safety filtering or
transient service issues), so empty replies are retried a few times.
"""

import asyncio
import logging
from typing import Any

from google import genai
from google.genai import types

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider.

    Hidden design decisions:
    - Google GenAI client initialization
    - Conversion of chat turns to Gemini contents
    - Retry on empty responses
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        max_retries: int = 3,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.5-flash, gemini-2.5-pro, ...)
            max_retries: Attempts made while the reply comes back empty
            **client_kwargs: Additional kwargs for genai.Client
        """
        self._model = model
        self._max_retries = max_retries
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        return self._model

    def _convert_messages(
        self, messages: list[ChatMessage]
    ) -> tuple[str | None, list[types.Content]]:
        """Split out the system instruction and map the rest to Gemini roles."""
        system_instruction = None
        contents = []

        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
            else:
                role = "model" if msg.role == "assistant" else "user"
                contents.append(types.Content(role=role, parts=[types.Part(text=msg.content)]))

        return system_instruction, contents

    def _extract_content(self, response) -> str:
        """Join the text parts of the first candidate, or return ''."""
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)
        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        model_to_use = model or self._model
        system_instruction, contents = self._convert_messages(messages)

        config = types.GenerateContentConfig(
            temperature=temperature,
            system_instruction=system_instruction,
            **kwargs
        )
        if max_tokens is not None:
            config.max_output_tokens = max_tokens

        content = ""
        usage = None

        for attempt in range(self._max_retries):
            response = await self._client.aio.models.generate_content(
                model=model_to_use,
                contents=contents,
                config=config
            )

            if response.usage_metadata:
                usage = {
                    "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                    "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                    "total_tokens": response.usage_metadata.total_token_count or 0
                }

            content = self._extract_content(response)
            if content:
                break

            logger.debug("Empty Gemini reply (attempt %d/%d)", attempt + 1, self._max_retries)
            if attempt < self._max_retries - 1:
                await asyncio.sleep(0.5 * (attempt + 1))

        return LLMResponse(content=content, model=model_to_use, usage=usage)

    async def close(self) -> None:
        """The GenAI client holds no resources that need closing."""
