"""Pytest configuration and shared fixtures."""
import asyncio
from collections.abc import Callable

import pytest

from mentor.chat import ExchangeProtocol, ExchangeSettings, SessionRegistry
from mentor.completion import CompletionService
from mentor.errors import CompletionError
from mentor.storage import InMemoryClientStorage


class FakeCompletion(CompletionService):
    """Completion service that answers from memory.

    ``reply`` may be a string or a function of the prompt. Setting ``error``
    makes every call fail; setting ``gate`` holds calls until it is set.
    """

    def __init__(
        self,
        reply: str | Callable[[str], str] = "Hi there!",
        error: str | None = None,
    ) -> None:
        self.reply = reply
        self.error = error
        self.gate: asyncio.Event | None = None
        self.prompts: list[str] = []
        self.closed = False

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise CompletionError(self.error)
        if callable(self.reply):
            return self.reply(prompt)
        return self.reply

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def storage():
    """Empty in-memory client storage."""
    return InMemoryClientStorage()


@pytest.fixture
def registry():
    """Registry holding the initial ``Chat 1`` session."""
    return SessionRegistry()


@pytest.fixture
def completion():
    return FakeCompletion()


@pytest.fixture
def settings():
    """Exchange settings with the typing effect off and no reveal delays."""
    return ExchangeSettings(typing_effect=False, first_tick=0, tick_interval=0)


@pytest.fixture
def exchange(registry, completion, settings):
    return ExchangeProtocol(registry, completion, settings=settings)
