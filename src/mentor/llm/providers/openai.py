from typing import Any

from openai import AsyncOpenAI

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions provider.

    Hidden design decisions:
    - OpenAI API client initialization
    - Message format conversion
    - Authentication mechanism
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Default model to use
            base_url: Optional custom API base URL (OpenAI-compatible servers)
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        model_to_use = model or self._model
        response = await self._client.chat.completions.create(
            model=model_to_use,
            messages=[{"role": m.role, "content": m.content} for m in messages],
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs
        )

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=response.model,
            usage=usage
        )

    async def close(self) -> None:
        await self._client.close()
