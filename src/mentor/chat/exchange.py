"""Exchange protocol between the user, a session and the completion service.

This module hides the optimistic-update sequence:
- the user's turn is appended before any network round-trip
- the session is marked pending until the call settles
- the reply is appended (or written over a regeneration target)
- replies can be revealed incrementally with a typing effect

Reveals run as independent asyncio tasks. They are never cancelled and
always write by message id, so a reveal keeps updating its message even
after the user switches tabs or starts another send.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..completion.base import CompletionService
from ..errors import CompletionError
from .config import (
    DEFAULT_TONE,
    DEFAULT_TYPING_EFFECT,
    DEFAULT_TYPING_SPEED,
    MAX_TYPING_SPEED,
    MIN_TYPING_SPEED,
    REVEAL_FIRST_TICK,
    REVEAL_TICK_INTERVAL,
    RERUN_FAILED,
    SEND_FAILED,
    SUMMARY_FAILED,
    SUMMARY_INSTRUCTION,
)
from .models import Message, Role
from .registry import SessionRegistry

logger = logging.getLogger(__name__)


def build_prompt(text: str, tone: str = DEFAULT_TONE) -> str:
    """Prefix ``text`` with a tone directive unless the tone is the default."""
    if tone == DEFAULT_TONE:
        return text
    return f"[Tone: {tone}] {text}"


def build_summary_prompt(transcript: str) -> str:
    return f"{SUMMARY_INSTRUCTION}\n\n{transcript}"


@dataclass
class SessionStatus:
    """Exchange state of one session."""

    inflight: int = 0
    error: str | None = None

    @property
    def pending(self) -> bool:
        """True while at least one completion call for the session is running."""
        return self.inflight > 0


@dataclass
class ExchangeSettings:
    """User-adjustable exchange options."""

    tone: str = DEFAULT_TONE
    typing_effect: bool = DEFAULT_TYPING_EFFECT
    typing_speed: int = DEFAULT_TYPING_SPEED
    first_tick: float = REVEAL_FIRST_TICK
    tick_interval: float = REVEAL_TICK_INTERVAL

    def set_typing_speed(self, speed: int) -> int:
        """Set the reveal speed, clamped to the supported range."""
        self.typing_speed = max(MIN_TYPING_SPEED, min(MAX_TYPING_SPEED, speed))
        return self.typing_speed


class ExchangeProtocol:
    """Sends user turns and reconciles the replies into sessions.

    Example:
        exchange = ExchangeProtocol(registry, completion)
        await exchange.send("Hello")
        await exchange.drain()  # wait for typing-effect reveals
    """

    def __init__(
        self,
        registry: SessionRegistry,
        completion: CompletionService,
        settings: ExchangeSettings | None = None,
        on_change: Callable[[str], None] | None = None,
    ) -> None:
        self._registry = registry
        self._completion = completion
        self.settings = settings or ExchangeSettings()
        self._on_change = on_change
        self._status: dict[str, SessionStatus] = {}
        self._reveals: set[asyncio.Task] = set()

    @property
    def status(self) -> dict[str, SessionStatus]:
        """Per-session exchange state keyed by session id."""
        return self._status

    def status_of(self, session_id: str) -> SessionStatus:
        if session_id not in self._status:
            self._status[session_id] = SessionStatus()
        return self._status[session_id]

    def is_pending(self, session_id: str) -> bool:
        return self.status_of(session_id).pending

    def set_on_change(self, callback: Callable[[str], None] | None) -> None:
        self._on_change = callback

    def _changed(self, session_id: str) -> None:
        if self._on_change is not None:
            self._on_change(session_id)

    async def send(self, text: str, session_id: str | None = None) -> Message | None:
        """Send a user turn from the active (or given) session.

        Args:
            text: Raw user input
            session_id: Originating session, defaults to the active one

        Returns:
            The appended user message, or None when the input was blank
        """
        if not text.strip():
            return None
        sid = session_id or self._registry.active_id
        session = self._registry.get(sid)
        if session is None:
            return None

        user_message = session.append(Message(role=Role.USER, text=text))
        self.status_of(sid).error = None
        self._changed(sid)

        await self._exchange(
            sid,
            build_prompt(text, self.settings.tone),
            target_id=None,
            reveal=self.settings.typing_effect,
            failure=SEND_FAILED,
        )
        return user_message

    async def edit_and_regenerate(self, message_id: str, new_text: str) -> bool:
        """Edit a user turn and regenerate the reply that follows it.

        The reply directly after the edited message is rewritten in place
        when it is an assistant turn; otherwise a new reply is appended.

        Returns:
            False when the id is unknown or names an assistant message
        """
        session = self._registry.owner_of(message_id)
        if session is None:
            return False
        message = session.find(message_id)
        if message is None or message.role != Role.USER:
            return False

        session.replace_text(message_id, new_text)
        following = session.following(message_id)
        target_id = following.id if following and following.role == Role.ASSISTANT else None
        self._changed(session.id)

        await self._exchange(
            session.id,
            build_prompt(new_text, self.settings.tone),
            target_id=target_id,
            reveal=self.settings.typing_effect,
            failure=RERUN_FAILED,
        )
        return True

    async def summarize(self, session_id: str | None = None) -> bool:
        """Ask for a bullet summary of a session and append it as a reply.

        Returns:
            False when the session has no messages
        """
        sid = session_id or self._registry.active_id
        session = self._registry.get(sid)
        if session is None or not session.messages:
            return False

        await self._exchange(
            sid,
            build_summary_prompt(session.transcript()),
            target_id=None,
            reveal=False,
            failure=SUMMARY_FAILED,
        )
        return True

    async def _exchange(
        self,
        session_id: str,
        prompt: str,
        target_id: str | None,
        reveal: bool,
        failure: str,
    ) -> None:
        status = self.status_of(session_id)
        status.inflight += 1
        self._changed(session_id)
        try:
            response = await self._completion.complete(prompt)
            self._deliver(session_id, response, target_id, reveal)
        except CompletionError as e:
            logger.warning("Completion failed for session %s: %s", session_id, e.message)
            status.error = failure
        finally:
            status.inflight -= 1
            self._changed(session_id)

    def _deliver(
        self,
        session_id: str,
        full_text: str,
        target_id: str | None,
        reveal: bool,
    ) -> None:
        if target_id is not None:
            owner = self._registry.owner_of(target_id)
            if owner is None:
                logger.info("Regeneration target %s is gone, dropping reply", target_id)
                return
            owner.replace_text(target_id, "" if reveal else full_text)
            self._changed(owner.id)
            message_id = target_id
        else:
            session = self._registry.get(session_id)
            if session is None:
                logger.info("Session %s closed before its reply arrived", session_id)
                return
            reply = session.append(
                Message(role=Role.ASSISTANT, text="" if reveal else full_text)
            )
            self._changed(session_id)
            message_id = reply.id

        if reveal:
            task = asyncio.create_task(self._reveal(message_id, full_text))
            self._reveals.add(task)
            task.add_done_callback(self._reveals.discard)

    async def _reveal(self, message_id: str, full_text: str) -> None:
        """Reveal ``full_text`` into a message a few characters at a time."""
        step = self.settings.typing_speed
        shown = 0
        await asyncio.sleep(self.settings.first_tick)
        while True:
            shown += step
            owner = self._registry.owner_of(message_id)
            if owner is None:
                return
            owner.replace_text(message_id, full_text[:shown])
            self._changed(owner.id)
            if shown >= len(full_text):
                return
            await asyncio.sleep(self.settings.tick_interval)

    @property
    def revealing(self) -> int:
        """Number of reveals still in flight."""
        return len(self._reveals)

    async def drain(self) -> None:
        """Wait until every in-flight reveal has finished."""
        while self._reveals:
            await asyncio.gather(*list(self._reveals))
