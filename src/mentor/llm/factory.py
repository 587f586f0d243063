from typing import Any

from .base import LLMProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: Provider type ('gemini' or 'openai')
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str (required)
                - model: str (default: 'gemini-2.5-flash')
            For OpenAI:
                - api_key: str (required)
                - model: str (default: 'gpt-4o-mini')
                - base_url: str | None

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> provider = create_llm_provider("gemini", api_key="...")
    """
    provider_lower = provider.lower()

    if provider_lower == "gemini":
        if "api_key" not in config:
            raise TypeError("Gemini provider requires 'api_key' in config")
        from .providers.gemini import GeminiProvider
        return GeminiProvider(**config)

    if provider_lower == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI provider requires 'api_key' in config")
        from .providers.openai import OpenAIProvider
        return OpenAIProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'gemini', 'openai'"
    )
