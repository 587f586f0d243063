"""Completion services used by the exchange protocol."""

from .base import CompletionService
from .http import HTTPCompletionService
from .provider import ProviderCompletionService

__all__ = [
    "CompletionService",
    "HTTPCompletionService",
    "ProviderCompletionService",
]
