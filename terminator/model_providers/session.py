"""Chat session bookkeeping."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Sequence

from terminator.model_providers.config import (
    AttachmentRef,
    ChatRole,
    ChatTurn,
    ModelOption,
    ProviderCredentials,
)
from terminator.model_providers.dispatcher import ChatDispatcher, ChatRequest

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "New Chat"
TITLE_MAX_CHARS = 42


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def title_from_prompt(prompt: str) -> str:
    """Session title derived from the first prompt."""
    return prompt.strip()[:TITLE_MAX_CHARS] or DEFAULT_TITLE


@dataclass
class ChatSession:
    """One conversation: an ordered list of turns plus metadata.

    Sends on the same session run one at a time, so every request sees
    the history as it stood after the previous reply.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    title: str = DEFAULT_TITLE
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    turns: list[ChatTurn] = field(default_factory=list)

    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    @property
    def history(self) -> tuple[ChatTurn, ...]:
        return tuple(self.turns)

    def _append(self, role: ChatRole, text: str) -> ChatTurn:
        turn = ChatTurn(role=role, text=text)
        self.turns.append(turn)
        self.updated_at = _utcnow()
        return turn

    async def send_draft(
        self,
        dispatcher: ChatDispatcher,
        model: ModelOption,
        credentials: ProviderCredentials,
        draft: str,
        attachments: Sequence[AttachmentRef] = (),
    ) -> ChatTurn:
        """Send ``draft`` to ``model`` and record both sides of the exchange.

        Returns the assistant turn. If the send fails, the user turn is
        kept and the error propagates.

        Raises:
            EmptyMessageError: if nothing would be sent. No turn is added.
            TransportError: on network failure or a non-2xx status.
        """
        async with self._lock:
            request = ChatRequest(
                selected_model=model,
                credentials=credentials,
                history=self.history,
                draft_text=draft,
                attachments=tuple(attachments),
            )
            message = dispatcher.prepare(request)

            self._append(ChatRole.USER, message)
            if not self.title.strip() or self.title == DEFAULT_TITLE:
                self.title = title_from_prompt(message)
                logger.debug(f"Session {self.id} titled {self.title!r}")

            reply = await dispatcher.deliver(request, message, session_id=self.id)
            return self._append(ChatRole.ASSISTANT, reply)


def sort_sessions(sessions: Iterable[ChatSession]) -> list[ChatSession]:
    """Most recently updated first."""
    return sorted(sessions, key=lambda s: s.updated_at, reverse=True)
