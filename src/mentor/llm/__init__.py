from .base import LLMProvider
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse

__all__ = [
    "ChatMessage",
    "LLMProvider",
    "LLMResponse",
    "create_llm_provider",
]
